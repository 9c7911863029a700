from fastapi import APIRouter, Depends

from ..errors import TtsttError
from ..models import SttReq, SttRes, TestSttReq, TestTtsReq, TtsReq, TtsRes
from ..services import speech_service
from .deps import get_pair_store, get_state, get_vendor_adapters, http_error


router = APIRouter(prefix="/api", tags=["speech"])


@router.post("/tts", response_model=TtsRes)
async def tts(request: TtsReq, state=Depends(get_state), store=Depends(get_pair_store), adapters=Depends(get_vendor_adapters)):
    try:
        return await speech_service.tts(state, store, request, adapters)
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/stt", response_model=SttRes)
async def stt(request: SttReq, state=Depends(get_state), store=Depends(get_pair_store), adapters=Depends(get_vendor_adapters)):
    try:
        return await speech_service.stt(state, store, request, adapters)
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/test-tts", response_model=TtsRes)
async def test_tts(request: TestTtsReq, state=Depends(get_state), store=Depends(get_pair_store), adapters=Depends(get_vendor_adapters)):
    try:
        return await speech_service.trial_tts(state, store, request.text, adapters)
    except TtsttError as e:
        raise http_error(e) from e


@router.post("/test-stt", response_model=SttRes)
async def test_stt(request: TestSttReq, state=Depends(get_state), store=Depends(get_pair_store), adapters=Depends(get_vendor_adapters)):
    try:
        return await speech_service.trial_stt(state, store, request.audio_data, adapters)
    except TtsttError as e:
        raise http_error(e) from e
