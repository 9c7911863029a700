from typing import Optional, Tuple


class VendorAdapter:
    """Base class for provider adapters (TTS/STT).

    Adapters wrap exactly one vendor and raise ``ProviderCallFailed`` when the
    vendor call fails.
    """

    def __init__(self, api_key: str):
        self.api_key = api_key

    def tts_params(self, voice: str, model: str, format: str) -> Tuple[str, str, str]:
        """Map requested values onto ones the vendor accepts."""
        return voice, model, format

    def stt_model(self, model: str) -> str:
        return model

    async def synthesize(self, text: str, voice: str, model: str, format: str, speed: float) -> bytes:
        raise NotImplementedError

    async def transcribe(self, audio_data: bytes, filename_hint: str, model: str, language: Optional[str] = None) -> str:
        raise NotImplementedError
