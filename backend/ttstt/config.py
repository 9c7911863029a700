import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging configuration
LOG_LEVEL = os.getenv("TTSTT_LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("ttstt")

# Environment variables
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
HISTORY_DEFAULT_LIMIT = int(os.getenv("TTSTT_HISTORY_LIMIT", "50"))

# Directories and paths
DATA_DIR = Path(os.getenv("TTSTT_DATA_DIR", "data"))
STORAGE_DIR = Path(os.getenv("TTSTT_STORAGE_DIR", "storage/audio_pairs"))
DB_PATH = Path(os.getenv("TTSTT_DB_PATH", str(DATA_DIR / "ttstt.db")))

# Fallbacks used when neither the request nor the provider config sets a value
DEFAULT_TTS_VOICE = "nova"
DEFAULT_TTS_MODEL = "gpt-4o-mini-tts"
DEFAULT_TTS_FORMAT = "mp3"
DEFAULT_TTS_SPEED = 1.5
DEFAULT_STT_MODEL = "whisper-1"
DEFAULT_STT_FORMAT = "webm"
DEFAULT_STT_FILENAME = "audio.webm"


def ensure_directories() -> None:
    """Ensure required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)


def debug_log(msg: str) -> None:
    """Debug logger for request parameter tracing."""
    logger.debug(f"DEBUG: {msg}")
