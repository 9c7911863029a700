from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from .deps import get_pair_store, get_state


router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/health")
async def health_check(state=Depends(get_state), store=Depends(get_pair_store)):
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "providers": len(state.providers),
        "default_tts_provider": state.default_tts_provider,
        "default_stt_provider": state.default_stt_provider,
        "storage_initialized": store.initialized,
    }
