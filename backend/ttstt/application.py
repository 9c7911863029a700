from pathlib import Path
from typing import Dict, Type, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, DB_PATH, STORAGE_DIR, logger
from .models import Provider
from .routers import dashboard, history, keys, providers, speech
from .services.keys_service import ensure_admin_key
from .services.pair_store import PairStore
from .state import TtsttState
from .vendors import VENDOR_ADAPTERS, VendorAdapter


def create_app(
    db_path: Union[str, Path] = DB_PATH,
    storage_dir: Union[str, Path] = STORAGE_DIR,
    vendor_adapters: Dict[Provider, Type[VendorAdapter]] = VENDOR_ADAPTERS,
) -> FastAPI:
    """Build the application with its state loaded from ``db_path``."""
    app = FastAPI(title="TTSTT - Text-to-Speech & Speech-to-Text API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if CORS_ORIGINS == "*" else CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    state = TtsttState.open(db_path)
    if ensure_admin_key(state):
        state.persist()

    app.state.ttstt = state
    app.state.pair_store = PairStore(storage_dir)
    app.state.vendor_adapters = vendor_adapters

    app.include_router(dashboard.router)
    app.include_router(speech.router)
    app.include_router(providers.router)
    app.include_router(keys.router)
    app.include_router(history.router)

    logger.info(f"TTSTT initialized with {len(state.providers)} provider(s), storage at {storage_dir}")
    return app
