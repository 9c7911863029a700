"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status the routers answer with, so handlers can
translate a ``TtsttError`` into an ``HTTPException`` without a lookup table.
"""


class TtsttError(Exception):
    status_code = 500

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.__class__.__name__)
        self.detail = detail or self.__class__.__name__


# Authorization
class AuthError(TtsttError):
    status_code = 401


class MissingKey(AuthError):
    def __init__(self, detail: str = "API key required"):
        super().__init__(detail)


class UnknownKey(AuthError):
    def __init__(self, detail: str = "Invalid API key"):
        super().__init__(detail)


class InsufficientRole(AuthError):
    status_code = 403

    def __init__(self, detail: str = "Admin permission required"):
        super().__init__(detail)


# Registry configuration
class ConfigError(TtsttError):
    status_code = 400


class ProviderNotConfigured(ConfigError):
    def __init__(self, provider=None):
        name = getattr(provider, "value", provider)
        super().__init__(f"Provider {name} not configured" if name else "Provider not configured")
        self.provider = provider


class InvalidKind(ConfigError):
    def __init__(self, kind: str = ""):
        super().__init__(f"Invalid type '{kind}': must be 'tts' or 'stt'")
        self.kind = kind


# Dispatch
class DispatchError(TtsttError):
    status_code = 400


class NoProviderAvailable(DispatchError):
    def __init__(self, detail: str = "No provider specified and no default configured"):
        super().__init__(detail)


class ProviderCallFailed(DispatchError):
    status_code = 502


class InvalidAudioData(DispatchError):
    pass


# Pair store
class PersistenceError(TtsttError):
    status_code = 500


class CreateFailed(PersistenceError):
    pass


class WriteFailed(PersistenceError):
    pass


class ReadFailed(PersistenceError):
    pass


class DecodeFailed(PersistenceError):
    pass


class ParseFailed(PersistenceError):
    pass


class NotFound(TtsttError):
    status_code = 404


# API key management
class KeyManagementError(TtsttError):
    status_code = 400


class AlreadyRetrieved(KeyManagementError):
    status_code = 409

    def __init__(self, detail: str = "Admin key already retrieved"):
        super().__init__(detail)


class CannotRevokeAdminKey(KeyManagementError):
    def __init__(self, detail: str = "Cannot revoke initial admin key"):
        super().__init__(detail)
