"""
Unit tests for audio-text pair persistence.

Tests the two-artifact record layout, best-effort reconstruction of damaged
metadata, idempotent initialization and reverse-chronological paging.
"""
import base64
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from ttstt.errors import CreateFailed, DecodeFailed, NotFound, ParseFailed, ReadFailed
from ttstt.models import AudioTextPair, Provider, RequestType
from ttstt.services.pair_store import PairStore, audio_extension


def make_pair(pair_id: str, timestamp: str, audio: bytes = b"audio-bytes", audio_format: str = "mp3",
              request_type: RequestType = RequestType.TTS) -> AudioTextPair:
    return AudioTextPair(
        id=pair_id,
        text=f"text for {pair_id}",
        audio_data=base64.b64encode(audio).decode(),
        audio_format=audio_format,
        provider=Provider.OPENAI,
        timestamp=timestamp,
        request_type=request_type,
        metadata=[("voice", "nova"), ("speed", "1.5")],
    )


class TestPairStore(unittest.IsolatedAsyncioTestCase):
    """Test cases for save/load_by_id/load_page."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "audio_pairs"
        self.store = PairStore(self.root)

    def tearDown(self):
        self._tmp.cleanup()

    def test_audio_extension(self):
        self.assertEqual(audio_extension("webm"), "webm")
        self.assertEqual(audio_extension("mp3"), "mp3")
        self.assertEqual(audio_extension("wav"), "audio")
        self.assertEqual(audio_extension(""), "audio")

    async def test_initialize_is_idempotent(self):
        await self.store.initialize()
        self.assertTrue(self.root.is_dir())
        self.assertTrue(self.store.initialized)
        await self.store.initialize()
        self.assertTrue(self.root.is_dir())
        # a second store over an existing root is fine too
        other = PairStore(self.root)
        await other.initialize()
        self.assertTrue(other.initialized)

    async def test_save_layout(self):
        pair = make_pair("rec-1", "2024-05-01T10:00:00.000000+00:00", audio=b"\xff\xfbmp3")
        await self.store.save(pair)
        record = self.root / "rec-1"
        self.assertEqual((record / "audio.mp3").read_bytes(), b"\xff\xfbmp3")
        metadata = json.loads((record / "metadata.json").read_text(encoding="utf-8"))
        self.assertNotIn("audio_data", metadata)
        self.assertEqual(metadata["provider"], "OpenAI")
        self.assertEqual(metadata["request_type"], "TTS")
        self.assertEqual(metadata["metadata"], [["voice", "nova"], ["speed", "1.5"]])

    async def test_round_trip(self):
        for fmt in ("mp3", "webm", "wav"):
            pair = make_pair(f"rec-{fmt}", "2024-05-01T10:00:00.123456+00:00", audio=b"\x00\x10" + fmt.encode(),
                             audio_format=fmt, request_type=RequestType.STT)
            saved = await self.store.save(pair)
            loaded = await self.store.load_by_id(saved.id)
            self.assertEqual(loaded, pair)

    async def test_generic_extension_on_disk(self):
        await self.store.save(make_pair("rec-wav", "2024-05-01T10:00:00+00:00", audio_format="wav"))
        self.assertTrue((self.root / "rec-wav" / "audio.audio").exists())

    async def test_save_rejects_bad_base64(self):
        pair = make_pair("rec-bad", "2024-05-01T10:00:00+00:00").model_copy(update={"audio_data": "%%%"})
        with self.assertRaises(DecodeFailed):
            await self.store.save(pair)
        # nothing is left behind for a payload that never decoded
        self.assertFalse((self.root / "rec-bad").exists())
        with self.assertRaises(NotFound):
            await self.store.load_by_id("rec-bad")
        self.assertEqual(await self.store.load_page(10), [])

    async def test_save_rejects_path_like_ids(self):
        for bad in ("../escape", "a/b", "", ".."):
            with self.assertRaises(CreateFailed):
                await self.store.save(make_pair(bad, "2024-05-01T10:00:00+00:00"))

    async def test_load_missing(self):
        await self.store.initialize()
        with self.assertRaises(NotFound):
            await self.store.load_by_id("does-not-exist")
        with self.assertRaises(NotFound):
            await self.store.load_by_id("../audio_pairs")

    async def test_load_corrupt_metadata(self):
        await self.store.save(make_pair("rec-1", "2024-05-01T10:00:00+00:00"))
        (self.root / "rec-1" / "metadata.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(ParseFailed):
            await self.store.load_by_id("rec-1")

    async def test_load_missing_audio(self):
        await self.store.save(make_pair("rec-1", "2024-05-01T10:00:00+00:00"))
        (self.root / "rec-1" / "audio.mp3").unlink()
        with self.assertRaises(ReadFailed):
            await self.store.load_by_id("rec-1")

    async def test_missing_fields_use_defaults(self):
        record = self.root / "legacy"
        record.mkdir(parents=True)
        (record / "metadata.json").write_text(
            json.dumps({"provider": "Acme", "request_type": "Both", "metadata": [["k", "v"], ["odd"], "x", [1, "n"]]}),
            encoding="utf-8",
        )
        (record / "audio.audio").write_bytes(b"raw")
        pair = await self.store.load_by_id("legacy")
        self.assertEqual(pair.id, "")
        self.assertEqual(pair.text, "")
        self.assertEqual(pair.timestamp, "")
        self.assertEqual(pair.audio_format, "audio")
        self.assertEqual(pair.provider, Provider.OPENAI)
        self.assertEqual(pair.request_type, RequestType.TTS)
        self.assertEqual(pair.metadata, [("k", "v"), ("", "n")])
        self.assertEqual(base64.b64decode(pair.audio_data), b"raw")

    async def _save_five(self):
        ids = []
        # ids deliberately not in time order
        for i, pair_id in enumerate(["e", "c", "a", "d", "b"]):
            await self.store.save(make_pair(pair_id, f"2024-05-01T10:00:0{i}.000000+00:00"))
            ids.append(pair_id)
        return ids

    async def test_page_is_most_recent_first(self):
        saved = await self._save_five()
        page = await self.store.load_page(limit=5, offset=0)
        self.assertEqual([p.id for p in page], list(reversed(saved)))

    async def test_pagination_is_disjoint_and_ordered(self):
        await self._save_five()
        first = await self.store.load_page(limit=2, offset=0)
        second = await self.store.load_page(limit=2, offset=2)
        everything = await self.store.load_page(limit=5, offset=0)
        first_ids = [p.id for p in first]
        second_ids = [p.id for p in second]
        self.assertFalse(set(first_ids) & set(second_ids))
        self.assertEqual(first_ids + second_ids, [p.id for p in everything][:4])
        self.assertEqual(await self.store.load_page(limit=2, offset=10), [])
        self.assertEqual(await self.store.load_page(limit=0, offset=0), [])

    async def test_page_reads_each_metadata_once(self):
        await self._save_five()
        reads = []
        read_metadata = self.store._read_metadata

        async def counting(record_dir):
            reads.append(record_dir.name)
            return await read_metadata(record_dir)

        with patch.object(self.store, "_read_metadata", counting):
            page = await self.store.load_page(limit=5, offset=0)
        self.assertEqual(len(page), 5)
        self.assertEqual(sorted(reads), ["a", "b", "c", "d", "e"])

    async def test_page_skips_broken_entries(self):
        await self._save_five()
        (self.root / "d" / "audio.mp3").unlink()
        (self.root / "stray-file.txt").write_text("not a record", encoding="utf-8")
        page = await self.store.load_page(limit=5, offset=0)
        self.assertEqual([p.id for p in page], ["b", "a", "c", "e"])

    async def test_page_on_empty_store(self):
        self.assertEqual(await self.store.load_page(limit=10, offset=0), [])
        self.assertTrue(self.root.is_dir())


if __name__ == "__main__":
    unittest.main()
