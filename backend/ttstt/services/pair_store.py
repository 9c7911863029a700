"""Durable storage for audio-text pairs.

Each pair lives in its own directory under the storage root::

    <root>/<pair id>/metadata.json   every field except the audio
    <root>/<pair id>/audio.<ext>     raw audio bytes

Keeping the audio out of ``metadata.json`` lets history listings order and
page records by reading only the small metadata documents.
"""
import base64
import binascii
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import aiofiles
import aiofiles.os

from ..config import STORAGE_DIR, logger
from ..errors import (
    CreateFailed,
    DecodeFailed,
    NotFound,
    ParseFailed,
    PersistenceError,
    ReadFailed,
    WriteFailed,
)
from ..models import AudioTextPair, Provider, RequestType

METADATA_FILENAME = "metadata.json"
AUDIO_EXTENSIONS = {"webm": "webm", "mp3": "mp3"}
GENERIC_AUDIO_EXTENSION = "audio"


def audio_extension(audio_format: str) -> str:
    return AUDIO_EXTENSIONS.get(audio_format, GENERIC_AUDIO_EXTENSION)


def _str_field(metadata: Dict[str, Any], key: str, default: str = "") -> str:
    value = metadata.get(key)
    return value if isinstance(value, str) else default


def _metadata_items(value: Any) -> List[Tuple[str, str]]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, list) and len(item) == 2:
            key, val = item
            items.append((key if isinstance(key, str) else "", val if isinstance(val, str) else ""))
    return items


def pair_from_metadata(metadata: Dict[str, Any], audio_data: str) -> AudioTextPair:
    """Rebuild a pair from its metadata document, defaulting whatever is missing."""
    try:
        provider = Provider(metadata.get("provider"))
    except (ValueError, TypeError):
        provider = Provider.OPENAI
    try:
        request_type = RequestType(metadata.get("request_type"))
    except (ValueError, TypeError):
        request_type = RequestType.TTS
    return AudioTextPair(
        id=_str_field(metadata, "id"),
        text=_str_field(metadata, "text"),
        audio_data=audio_data,
        audio_format=_str_field(metadata, "audio_format", GENERIC_AUDIO_EXTENSION),
        provider=provider,
        timestamp=_str_field(metadata, "timestamp"),
        request_type=request_type,
        metadata=_metadata_items(metadata.get("metadata")),
    )


class PairStore:
    """Saves and loads audio-text pairs under ``base_dir``."""

    def __init__(self, base_dir: Union[str, Path] = STORAGE_DIR):
        self.base_dir = Path(base_dir)
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        if self._initialized:
            return
        try:
            await aiofiles.os.makedirs(self.base_dir, exist_ok=True)
            logger.info(f"Audio pair storage ready at {self.base_dir}")
        except OSError as e:
            # The directory might already exist, which is fine
            logger.warning(f"Note: audio pair storage at {self.base_dir} may already exist: {e}")
        self._initialized = True

    def _record_dir(self, pair_id: str) -> Path:
        if not pair_id or pair_id in (".", "..") or Path(pair_id).name != pair_id or "\\" in pair_id:
            raise NotFound(f"Audio-text pair '{pair_id}' not found")
        return self.base_dir / pair_id

    async def save(self, pair: AudioTextPair) -> AudioTextPair:
        await self.initialize()
        try:
            record_dir = self._record_dir(pair.id)
        except NotFound as e:
            raise CreateFailed(f"Invalid pair id '{pair.id}'") from e

        try:
            audio_bytes = base64.b64decode(pair.audio_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeFailed(f"Failed to decode audio data: {e}") from e

        try:
            await aiofiles.os.makedirs(record_dir, exist_ok=True)
        except OSError as e:
            raise CreateFailed(f"Failed to create pair directory: {e}") from e

        metadata = pair.model_dump(mode="json", exclude={"audio_data"})
        try:
            async with aiofiles.open(record_dir / METADATA_FILENAME, "w", encoding="utf-8") as f:
                await f.write(json.dumps(metadata))
        except OSError as e:
            raise WriteFailed(f"Failed to write metadata: {e}") from e

        audio_path = record_dir / f"audio.{audio_extension(pair.audio_format)}"
        try:
            async with aiofiles.open(audio_path, "wb") as f:
                await f.write(audio_bytes)
        except OSError as e:
            raise WriteFailed(f"Failed to write audio: {e}") from e
        return pair

    async def _read_metadata(self, record_dir: Path) -> Dict[str, Any]:
        try:
            async with aiofiles.open(record_dir / METADATA_FILENAME, "r", encoding="utf-8") as f:
                raw = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailed(f"Failed to read metadata: {e}") from e
        try:
            metadata = json.loads(raw)
        except ValueError as e:
            raise ParseFailed(f"Failed to parse metadata: {e}") from e
        if not isinstance(metadata, dict):
            raise ParseFailed("Failed to parse metadata: expected a JSON object")
        return metadata

    async def _load_from_dir(self, record_dir: Path, metadata: Optional[Dict[str, Any]] = None) -> AudioTextPair:
        if metadata is None:
            metadata = await self._read_metadata(record_dir)
        audio_format = _str_field(metadata, "audio_format", GENERIC_AUDIO_EXTENSION)
        audio_path = record_dir / f"audio.{audio_extension(audio_format)}"
        try:
            async with aiofiles.open(audio_path, "rb") as f:
                audio_bytes = await f.read()
        except OSError as e:
            raise ReadFailed(f"Failed to read audio: {e}") from e
        return pair_from_metadata(metadata, base64.b64encode(audio_bytes).decode("ascii"))

    async def load_by_id(self, pair_id: str) -> AudioTextPair:
        record_dir = self._record_dir(pair_id)
        if not await aiofiles.os.path.isdir(record_dir):
            raise NotFound(f"Audio-text pair '{pair_id}' not found")
        return await self._load_from_dir(record_dir)

    async def _index_entry(self, record_dir: Path) -> Tuple[str, str, Optional[Dict[str, Any]]]:
        """Sort key (timestamp, id) plus the parsed metadata, or None if unreadable."""
        try:
            metadata = await self._read_metadata(record_dir)
        except PersistenceError:
            return "", record_dir.name, None
        return _str_field(metadata, "timestamp"), record_dir.name, metadata

    async def load_page(self, limit: int, offset: int = 0) -> List[AudioTextPair]:
        """Most recent pairs first, ordered by stored timestamp then id.

        Entries that fail to load are logged and left out of the page.
        """
        await self.initialize()
        try:
            names = await aiofiles.os.listdir(self.base_dir)
        except OSError as e:
            raise ReadFailed(f"Failed to read storage directory: {e}") from e

        entries = []
        for name in names:
            record_dir = self.base_dir / name
            if await aiofiles.os.path.isdir(record_dir):
                entries.append(await self._index_entry(record_dir))
        entries.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)

        start = max(offset, 0)
        page = entries[start:start + max(limit, 0)]

        pairs = []
        for _, name, metadata in page:
            record_dir = self.base_dir / name
            try:
                if metadata is None:
                    # re-read to surface the original failure
                    metadata = await self._read_metadata(record_dir)
                pairs.append(await self._load_from_dir(record_dir, metadata))
            except PersistenceError as e:
                logger.error(f"Failed to load pair from {record_dir}: {e}")
        return pairs
