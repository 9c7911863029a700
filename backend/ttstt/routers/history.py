from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..config import HISTORY_DEFAULT_LIMIT
from ..errors import TtsttError
from ..models import AudioTextPair
from .deps import get_pair_store, http_error


router = APIRouter(prefix="/api", tags=["history"])


@router.get("/history", response_model=List[AudioTextPair])
async def get_history(
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    store=Depends(get_pair_store),
):
    try:
        return await store.load_page(
            HISTORY_DEFAULT_LIMIT if limit is None else limit,
            0 if offset is None else offset,
        )
    except TtsttError as e:
        raise http_error(e) from e


@router.get("/history/{pair_id}", response_model=AudioTextPair)
async def get_audio_text_pair(pair_id: str, store=Depends(get_pair_store)):
    try:
        return await store.load_by_id(pair_id)
    except TtsttError as e:
        raise http_error(e) from e
