from typing import List

from fastapi import APIRouter, Depends

from ..errors import TtsttError
from ..models import AddProviderReq, MessageRes, ProviderInfo, RemoveProviderReq, SetDefaultProviderReq
from ..services import registry_service
from ..services.auth_service import validate_api_key
from .deps import get_state, http_error


router = APIRouter(prefix="/api", tags=["providers"])


@router.get("/providers", response_model=List[ProviderInfo])
async def get_providers(state=Depends(get_state)):
    return registry_service.list_providers(state)


@router.post("/providers", response_model=MessageRes)
async def add_provider(request: AddProviderReq, state=Depends(get_state)):
    try:
        async with state.mutation():
            validate_api_key(state, request.api_key, require_admin=True)
            registry_service.add_or_replace(state, request.config)
        return {"message": "Provider added successfully"}
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/providers/remove", response_model=MessageRes)
async def remove_provider(request: RemoveProviderReq, state=Depends(get_state)):
    try:
        async with state.mutation():
            validate_api_key(state, request.api_key, require_admin=True)
            registry_service.remove(state, request.provider)
        return {"message": "Provider removed successfully"}
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/providers/default", response_model=MessageRes)
async def set_default_provider(request: SetDefaultProviderReq, state=Depends(get_state)):
    try:
        async with state.mutation():
            validate_api_key(state, request.api_key, require_admin=True)
            registry_service.set_default(state, request.provider, request.provider_type)
        return {"message": "Default provider set successfully"}
    except TtsttError as e:
        raise http_error(e) from e
