from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel


class Provider(str, Enum):
    OPENAI = "OpenAI"
    # Future: ElevenLabs, PlayAI, Groq


class RequestType(str, Enum):
    TTS = "TTS"
    STT = "STT"


class ApiKeyRole(str, Enum):
    ADMIN = "Admin"
    REQUESTOR = "Requestor"


class ProviderConfig(BaseModel):
    provider: Provider
    api_key: str
    is_default_tts: bool = False
    is_default_stt: bool = False
    default_voice: Optional[str] = None
    default_speed: Optional[float] = None


class ProviderInfo(BaseModel):
    provider: Provider
    is_default_tts: bool
    is_default_stt: bool
    default_voice: Optional[str] = None
    default_speed: Optional[float] = None


class ApiKey(BaseModel):
    key: str
    role: ApiKeyRole
    created_at: str
    name: str


class ApiKeyInfo(BaseModel):
    name: str
    role: ApiKeyRole
    created_at: str
    key_preview: str


# TTS / STT
class TtsReq(BaseModel):
    text: str
    provider: Optional[Provider] = None
    voice: Optional[str] = None
    model: Optional[str] = None
    format: Optional[str] = None
    speed: Optional[float] = None
    api_key: Optional[str] = None  # request authentication


class TtsRes(BaseModel):
    audio_data: str  # base64
    format: str
    provider: Provider


class SttReq(BaseModel):
    audio_data: str  # base64
    provider: Optional[Provider] = None
    model: Optional[str] = None
    language: Optional[str] = None
    api_key: Optional[str] = None


class SttRes(BaseModel):
    text: str
    provider: Provider


class TestTtsReq(BaseModel):
    text: str


class TestSttReq(BaseModel):
    audio_data: str


# Storage
class AudioTextPair(BaseModel):
    id: str
    text: str
    audio_data: str  # base64
    audio_format: str
    provider: Provider
    timestamp: str
    request_type: RequestType
    metadata: List[Tuple[str, str]] = []


# Management requests
class AddProviderReq(BaseModel):
    api_key: Optional[str] = None
    config: ProviderConfig


class RemoveProviderReq(BaseModel):
    api_key: Optional[str] = None
    provider: Provider


class SetDefaultProviderReq(BaseModel):
    api_key: Optional[str] = None
    provider: Provider
    provider_type: str  # "tts" or "stt"


class GenerateApiKeyReq(BaseModel):
    api_key: Optional[str] = None
    name: str
    role: ApiKeyRole


class GenerateApiKeyRes(BaseModel):
    key: str
    name: str
    role: ApiKeyRole


class RevokeApiKeyReq(BaseModel):
    api_key: Optional[str] = None
    key_to_revoke: str


class ListApiKeysReq(BaseModel):
    api_key: Optional[str] = None


class GetAdminKeyRes(BaseModel):
    admin_key: str
    message: str


class MessageRes(BaseModel):
    message: str
