import uuid
from datetime import datetime, timezone
from typing import List

from ..config import logger
from ..errors import AlreadyRetrieved, CannotRevokeAdminKey
from ..models import ApiKey, ApiKeyInfo, ApiKeyRole, GenerateApiKeyRes, GetAdminKeyRes

KEY_PREVIEW_LENGTH = 20


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_key(role: ApiKeyRole) -> str:
    prefix = "admin" if role == ApiKeyRole.ADMIN else "req"
    return f"ttstt-{prefix}-{uuid.uuid4()}"


def _preview(key: str) -> str:
    return f"{key[:KEY_PREVIEW_LENGTH]}..."


def ensure_admin_key(state) -> bool:
    """Create the initial admin key on first startup. Returns True if one was made."""
    if state.admin_key:
        return False
    state.admin_key = _new_key(ApiKeyRole.ADMIN)
    state.api_keys.append(
        ApiKey(key=state.admin_key, role=ApiKeyRole.ADMIN, created_at=_now(), name="Initial Admin Key")
    )
    logger.info(f"Generated admin API key {_preview(state.admin_key)} (fetch it once via /api/admin-key)")
    return True


def generate_api_key(state, name: str, role: ApiKeyRole) -> GenerateApiKeyRes:
    entry = ApiKey(key=_new_key(role), role=role, created_at=_now(), name=name)
    state.api_keys.append(entry)
    logger.info(f"Generated {role.value} API key '{name}'")
    return GenerateApiKeyRes(key=entry.key, name=entry.name, role=entry.role)


def revoke_api_key(state, key_to_revoke: str) -> None:
    if key_to_revoke == state.admin_key:
        raise CannotRevokeAdminKey()
    before = len(state.api_keys)
    state.api_keys = [k for k in state.api_keys if k.key != key_to_revoke]
    if len(state.api_keys) < before:
        logger.info(f"Revoked API key {_preview(key_to_revoke)}")


def list_api_keys(state) -> List[ApiKeyInfo]:
    return [
        ApiKeyInfo(name=k.name, role=k.role, created_at=k.created_at, key_preview=_preview(k.key))
        for k in state.api_keys
    ]


def get_admin_key(state) -> GetAdminKeyRes:
    """Hand out the initial admin key while it is still the only admin key."""
    admin_count = sum(1 for k in state.api_keys if k.role == ApiKeyRole.ADMIN)
    if admin_count != 1 or not state.admin_key:
        raise AlreadyRetrieved()
    return GetAdminKeyRes(admin_key=state.admin_key, message="Save this key! It will not be shown again.")
