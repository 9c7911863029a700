import base64
import binascii
from typing import Dict, List, Optional, Tuple, Type

from ..config import (
    DEFAULT_STT_FILENAME,
    DEFAULT_STT_MODEL,
    DEFAULT_TTS_FORMAT,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_SPEED,
    DEFAULT_TTS_VOICE,
    debug_log,
)
from ..errors import InvalidAudioData, NoProviderAvailable
from ..models import Provider, SttReq, SttRes, TtsReq, TtsRes
from ..vendors import VENDOR_ADAPTERS, VendorAdapter, build_adapter
from .registry_service import default_provider, get_provider_config

Metadata = List[Tuple[str, str]]


def resolve_provider(state, requested: Optional[Provider], kind: str) -> Provider:
    """The explicit provider, else the recorded default for ``kind``."""
    provider = requested or default_provider(state, kind)
    if provider is None:
        raise NoProviderAvailable()
    return provider


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


async def synthesize(
    state, request: TtsReq, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> Tuple[TtsRes, Metadata]:
    """Run a TTS request against the resolved provider.

    Returns the response and the effective call parameters, which callers
    record alongside the stored pair.
    """
    provider = resolve_provider(state, request.provider, "tts")
    config = get_provider_config(state, provider)
    adapter = build_adapter(config, adapters)

    voice, model, fmt = adapter.tts_params(
        _first(request.voice, config.default_voice, DEFAULT_TTS_VOICE),
        _first(request.model, DEFAULT_TTS_MODEL),
        _first(request.format, DEFAULT_TTS_FORMAT),
    )
    speed = float(_first(request.speed, config.default_speed, DEFAULT_TTS_SPEED))
    debug_log(f"TTS dispatch to {provider.value}: voice={voice}, model={model}, format={fmt}, speed={speed}")

    audio = await adapter.synthesize(request.text, voice, model, fmt, speed)
    response = TtsRes(audio_data=base64.b64encode(audio).decode("ascii"), format=fmt, provider=provider)
    metadata = [("voice", voice), ("model", model), ("speed", str(speed))]
    return response, metadata


async def transcribe(
    state, request: SttReq, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> Tuple[SttRes, Metadata]:
    provider = resolve_provider(state, request.provider, "stt")
    config = get_provider_config(state, provider)
    adapter = build_adapter(config, adapters)

    try:
        audio = base64.b64decode(request.audio_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidAudioData(f"Failed to decode audio data: {e}") from e

    model = adapter.stt_model(_first(request.model, DEFAULT_STT_MODEL))
    debug_log(f"STT dispatch to {provider.value}: model={model}, language={request.language}, bytes={len(audio)}")

    text = await adapter.transcribe(audio, DEFAULT_STT_FILENAME, model, request.language)
    metadata = [("model", model)]
    if request.language:
        metadata.append(("language", request.language))
    return SttRes(text=text, provider=provider), metadata
