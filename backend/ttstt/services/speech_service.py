import uuid
from datetime import datetime, timezone
from typing import Dict, List, Tuple, Type

from ..config import (
    DEFAULT_STT_FORMAT,
    DEFAULT_TTS_FORMAT,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_SPEED,
    DEFAULT_TTS_VOICE,
    logger,
)
from ..errors import PersistenceError
from ..models import AudioTextPair, Provider, RequestType, SttReq, SttRes, TtsReq, TtsRes
from ..vendors import VENDOR_ADAPTERS, VendorAdapter
from . import dispatch_service
from .auth_service import validate_optional_api_key
from .pair_store import PairStore


def new_pair(
    text: str,
    audio_data: str,
    audio_format: str,
    provider: Provider,
    request_type: RequestType,
    metadata: List[Tuple[str, str]],
) -> AudioTextPair:
    return AudioTextPair(
        id=str(uuid.uuid4()),
        text=text,
        audio_data=audio_data,
        audio_format=audio_format,
        provider=provider,
        timestamp=datetime.now(timezone.utc).isoformat(timespec="microseconds"),
        request_type=request_type,
        metadata=metadata,
    )


async def record_pair(store: PairStore, pair: AudioTextPair) -> None:
    """Persist ``pair``; failures are logged and never reach the caller."""
    try:
        await store.save(pair)
    except PersistenceError as e:
        logger.error(f"Failed to save audio-text pair {pair.id}: {e}")


async def tts(
    state, store: PairStore, request: TtsReq, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> TtsRes:
    validate_optional_api_key(state, request.api_key)
    response, metadata = await dispatch_service.synthesize(state, request, adapters)
    pair = new_pair(
        text=request.text,
        audio_data=response.audio_data,
        audio_format=response.format,
        provider=response.provider,
        request_type=RequestType.TTS,
        metadata=metadata,
    )
    await record_pair(store, pair)
    return response


async def stt(
    state, store: PairStore, request: SttReq, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> SttRes:
    validate_optional_api_key(state, request.api_key)
    response, metadata = await dispatch_service.transcribe(state, request, adapters)
    pair = new_pair(
        text=response.text,
        audio_data=request.audio_data,
        # recorded browser audio
        audio_format=DEFAULT_STT_FORMAT,
        provider=response.provider,
        request_type=RequestType.STT,
        metadata=metadata,
    )
    await record_pair(store, pair)
    return response


async def trial_tts(
    state, store: PairStore, text: str, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> TtsRes:
    request = TtsReq(
        text=text,
        provider=state.default_tts_provider,
        voice=DEFAULT_TTS_VOICE,
        model=DEFAULT_TTS_MODEL,
        format=DEFAULT_TTS_FORMAT,
        speed=DEFAULT_TTS_SPEED,
    )
    return await tts(state, store, request, adapters)


async def trial_stt(
    state, store: PairStore, audio_data: str, adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS
) -> SttRes:
    request = SttReq(audio_data=audio_data, provider=state.default_stt_provider)
    return await stt(state, store, request, adapters)
