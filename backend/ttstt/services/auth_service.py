from typing import Optional

from ..errors import InsufficientRole, MissingKey, UnknownKey
from ..models import ApiKey, ApiKeyRole


def find_api_key(state, key: str) -> Optional[ApiKey]:
    for entry in state.api_keys:
        if entry.key == key:
            return entry
    return None


def validate_api_key(state, api_key: Optional[str], require_admin: bool) -> ApiKey:
    """Check ``api_key`` against the stored keys and return the matching entry.

    Raises ``MissingKey`` when no key is given, ``UnknownKey`` when it matches
    nothing (the empty string included) and ``InsufficientRole`` when an admin
    key is required but the key belongs to a requestor.
    """
    if api_key is None:
        raise MissingKey()
    entry = find_api_key(state, api_key)
    if entry is None:
        raise UnknownKey()
    if require_admin and entry.role != ApiKeyRole.ADMIN:
        raise InsufficientRole()
    return entry


def validate_optional_api_key(state, api_key: Optional[str]) -> None:
    """TTS/STT calls may be anonymous; a key, once given, must be valid."""
    if api_key is not None:
        validate_api_key(state, api_key, require_admin=False)
