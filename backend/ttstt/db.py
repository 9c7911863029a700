import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import DB_PATH, logger
from .models import ApiKey, ApiKeyRole, Provider, ProviderConfig

PathLike = Union[str, Path]


def init_database(db_path: PathLike = DB_PATH) -> None:
    """Initialize SQLite database with the registry and key tables."""
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    cursor.executescript(
        """
        CREATE TABLE IF NOT EXISTS providers (
            provider TEXT PRIMARY KEY,
            api_key TEXT NOT NULL,
            is_default_tts INTEGER NOT NULL DEFAULT 0,
            is_default_stt INTEGER NOT NULL DEFAULT 0,
            default_voice TEXT,
            default_speed REAL,
            position INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS api_keys (
            key TEXT PRIMARY KEY,
            role TEXT NOT NULL CHECK (role IN ('Admin', 'Requestor')),
            name TEXT NOT NULL,
            created_at TEXT NOT NULL,
            position INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT
        );
        """
    )

    conn.commit()
    conn.close()


def get_db_connection(db_path: PathLike = DB_PATH) -> sqlite3.Connection:
    """Get SQLite database connection."""
    return sqlite3.connect(str(db_path))


def dict_factory(cursor, row) -> Dict[str, Any]:
    """Convert SQLite row to dictionary."""
    d: Dict[str, Any] = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _parse_provider(value: Optional[str]) -> Optional[Provider]:
    if not value:
        return None
    try:
        return Provider(value)
    except ValueError:
        logger.warning(f"Ignoring unknown provider '{value}' stored in settings")
        return None


def load_state(state, db_path: PathLike = DB_PATH) -> None:
    """Populate ``state`` from the database, replacing whatever it held."""
    conn = get_db_connection(db_path)
    conn.row_factory = dict_factory
    cursor = conn.cursor()
    try:
        cursor.execute("SELECT * FROM providers ORDER BY position")
        providers = []
        for row in cursor.fetchall():
            provider = _parse_provider(row["provider"])
            if provider is None:
                continue
            providers.append(
                ProviderConfig(
                    provider=provider,
                    api_key=row["api_key"],
                    is_default_tts=bool(row["is_default_tts"]),
                    is_default_stt=bool(row["is_default_stt"]),
                    default_voice=row["default_voice"],
                    default_speed=row["default_speed"],
                )
            )
        cursor.execute("SELECT * FROM api_keys ORDER BY position")
        api_keys = [
            ApiKey(key=row["key"], role=ApiKeyRole(row["role"]), name=row["name"], created_at=row["created_at"])
            for row in cursor.fetchall()
        ]
        cursor.execute("SELECT key, value FROM settings")
        settings = {row["key"]: row["value"] for row in cursor.fetchall()}
    finally:
        conn.close()

    state.providers = providers
    state.api_keys = api_keys
    state.default_tts_provider = _parse_provider(settings.get("default_tts_provider"))
    state.default_stt_provider = _parse_provider(settings.get("default_stt_provider"))
    state.admin_key = settings.get("admin_key") or ""


def save_state(state, db_path: PathLike = DB_PATH) -> None:
    """Rewrite the stored registry and keys from ``state`` in one transaction."""
    conn = get_db_connection(db_path)
    cursor = conn.cursor()
    try:
        cursor.execute("DELETE FROM providers")
        for position, p in enumerate(state.providers):
            cursor.execute(
                """
                INSERT INTO providers (provider, api_key, is_default_tts, is_default_stt, default_voice, default_speed, position)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    p.provider.value,
                    p.api_key,
                    int(p.is_default_tts),
                    int(p.is_default_stt),
                    p.default_voice,
                    p.default_speed,
                    position,
                ),
            )
        cursor.execute("DELETE FROM api_keys")
        for position, k in enumerate(state.api_keys):
            cursor.execute(
                "INSERT INTO api_keys (key, role, name, created_at, position) VALUES (?, ?, ?, ?, ?)",
                (k.key, k.role.value, k.name, k.created_at, position),
            )
        settings = {
            "default_tts_provider": state.default_tts_provider.value if state.default_tts_provider else None,
            "default_stt_provider": state.default_stt_provider.value if state.default_stt_provider else None,
            "admin_key": state.admin_key,
        }
        cursor.executemany(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
            list(settings.items()),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
