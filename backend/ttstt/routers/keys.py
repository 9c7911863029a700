from typing import List

from fastapi import APIRouter, Depends

from ..errors import TtsttError
from ..models import ApiKeyInfo, GenerateApiKeyReq, GenerateApiKeyRes, GetAdminKeyRes, ListApiKeysReq, MessageRes, RevokeApiKeyReq
from ..services import keys_service
from ..services.auth_service import validate_api_key
from .deps import get_state, http_error


router = APIRouter(prefix="/api", tags=["keys"])


@router.post("/keys", response_model=GenerateApiKeyRes)
async def generate_api_key(request: GenerateApiKeyReq, state=Depends(get_state)):
    try:
        async with state.mutation():
            validate_api_key(state, request.api_key, require_admin=True)
            return keys_service.generate_api_key(state, request.name, request.role)
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/keys/revoke", response_model=MessageRes)
async def revoke_api_key(request: RevokeApiKeyReq, state=Depends(get_state)):
    try:
        async with state.mutation():
            validate_api_key(state, request.api_key, require_admin=True)
            keys_service.revoke_api_key(state, request.key_to_revoke)
        return {"message": "API key revoked successfully"}
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/keys/list", response_model=List[ApiKeyInfo])
async def list_api_keys(request: ListApiKeysReq, state=Depends(get_state)):
    try:
        validate_api_key(state, request.api_key, require_admin=True)
        return keys_service.list_api_keys(state)
    except TtsttError as e:
        raise http_error(e) from e


@router.get("/admin-key", response_model=GetAdminKeyRes)
async def get_admin_key(state=Depends(get_state)):
    try:
        return keys_service.get_admin_key(state)
    except TtsttError as e:
        raise http_error(e) from e
