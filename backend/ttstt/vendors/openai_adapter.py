import time
from typing import Any, Dict, Optional, Tuple

from openai import AsyncOpenAI

from .base import VendorAdapter
from ..config import (
    DEFAULT_STT_MODEL,
    DEFAULT_TTS_FORMAT,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_VOICE,
    debug_log,
    logger,
)
from ..errors import ProviderCallFailed


class OpenAIAdapter(VendorAdapter):
    """OpenAI speech (TTS) and transcription (STT) adapter."""

    VOICES = ("alloy", "ash", "ballad", "coral", "echo", "fable", "onyx", "nova", "sage", "shimmer", "verse")
    TTS_MODELS = ("tts-1", "tts-1-hd", "gpt-4o-mini-tts")
    FORMATS = ("mp3", "opus", "aac", "flac", "wav", "pcm")
    STT_MODELS = ("whisper-1", "gpt-4o-transcribe", "gpt-4o-mini-transcribe")

    def __init__(self, api_key: str):
        super().__init__(api_key)
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    def tts_params(self, voice: str, model: str, format: str) -> Tuple[str, str, str]:
        return (
            voice if voice in self.VOICES else DEFAULT_TTS_VOICE,
            model if model in self.TTS_MODELS else DEFAULT_TTS_MODEL,
            format if format in self.FORMATS else DEFAULT_TTS_FORMAT,
        )

    def stt_model(self, model: str) -> str:
        return model if model in self.STT_MODELS else DEFAULT_STT_MODEL

    async def synthesize(self, text: str, voice: str, model: str, format: str, speed: float) -> bytes:
        req_time = time.perf_counter()
        debug_log(f"OpenAI TTS synthesis: model={model}, voice={voice}, format={format}, speed={speed}")
        try:
            response = await self.client.audio.speech.create(
                model=model,
                voice=voice,
                input=text,
                response_format=format,
                speed=speed,
            )
            audio_data = response.content
        except Exception as e:
            logger.error(f"OpenAI TTS error: {e}")
            raise ProviderCallFailed(f"OpenAI TTS error: {e}") from e
        logger.info(
            f"OpenAI TTS synthesis completed: {len(audio_data)} bytes in {time.perf_counter() - req_time:.3f}s for text length: {len(text)}"
        )
        return audio_data

    async def transcribe(self, audio_data: bytes, filename_hint: str, model: str, language: Optional[str] = None) -> str:
        req_time = time.perf_counter()
        params: Dict[str, Any] = {"model": model, "file": (filename_hint, audio_data)}
        if language:
            params["language"] = language
        debug_log(f"OpenAI transcribing {filename_hint} ({len(audio_data)} bytes) with model={model}, language={language}")
        try:
            response = await self.client.audio.transcriptions.create(**params)
        except Exception as e:
            logger.error(f"OpenAI STT error: {e}")
            raise ProviderCallFailed(f"OpenAI STT error: {e}") from e
        transcript = response.text
        logger.info(f"OpenAI transcription completed: {len(transcript)} chars in {time.perf_counter() - req_time:.3f}s")
        return transcript
