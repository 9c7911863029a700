import asyncio
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import DB_PATH, logger
from .db import init_database, load_state, save_state
from .errors import WriteFailed
from .models import ApiKey, Provider, ProviderConfig


class TtsttState:
    """Registry and key state owned by a single process.

    Mutations go through :meth:`mutation`, which serializes them behind an
    ``asyncio.Lock`` and writes the result back to SQLite before releasing it.
    Reads take no lock.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path) if db_path is not None else None
        self.providers: List[ProviderConfig] = []
        self.api_keys: List[ApiKey] = []
        self.default_tts_provider: Optional[Provider] = None
        self.default_stt_provider: Optional[Provider] = None
        self.admin_key: str = ""
        self._lock = asyncio.Lock()

    @classmethod
    def open(cls, db_path: Union[str, Path] = DB_PATH) -> "TtsttState":
        """Create the tables if needed and load the stored state."""
        state = cls(db_path)
        state.db_path.parent.mkdir(parents=True, exist_ok=True)
        init_database(state.db_path)
        load_state(state, state.db_path)
        return state

    def persist(self) -> None:
        if self.db_path is not None:
            save_state(self, self.db_path)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "providers": [p.model_copy() for p in self.providers],
            "api_keys": [k.model_copy() for k in self.api_keys],
            "default_tts_provider": self.default_tts_provider,
            "default_stt_provider": self.default_stt_provider,
            "admin_key": self.admin_key,
        }

    def restore(self, snapshot: Dict[str, Any]) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)

    @asynccontextmanager
    async def mutation(self):
        """Apply a change under the lock; roll it back if it cannot be stored."""
        async with self._lock:
            before = self.snapshot()
            try:
                yield self
            except BaseException:
                self.restore(before)
                raise
            try:
                self.persist()
            except sqlite3.Error as e:
                self.restore(before)
                logger.error(f"Failed to persist registry state: {e}")
                raise WriteFailed(f"Failed to persist registry state: {e}") from e
