"""
Shared constants for SubtitleForge.
Imported by every other module.
"""

import pathlib

# ── Application identity ──────────────────────────────────────────────
APP_NAME = "SubtitleForge"
APP_VERSION = "1.0.0"

# ── Filesystem paths ─────────────────────────────────────────────────
HOME = pathlib.Path.home()

APP_SUPPORT_DIR = HOME / ".subtitler"
CONFIG_PATH = APP_SUPPORT_DIR / "config.json"
LOG_DIR = APP_SUPPORT_DIR / "logs"

DEFAULT_UPLOAD_DIR = APP_SUPPORT_DIR / "uploads"
DEFAULT_OUTPUT_DIR = APP_SUPPORT_DIR / "downloads"

# whisper.cpp build layout
DEFAULT_WHISPER_ROOT = HOME / "whisper.cpp"
DEFAULT_WHISPER_EXECUTABLE = DEFAULT_WHISPER_ROOT / "build" / "bin" / "whisper-cli"
DEFAULT_WHISPER_MODEL = DEFAULT_WHISPER_ROOT / "models" / "ggml-base.en.bin"

# ── Job status values ─────────────────────────────────────────────────
class JobStatus:
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

# ── Job stage values (ordered) ────────────────────────────────────────
class JobStage:
    RECEIVED = "RECEIVED"
    EXTRACTING_AUDIO = "EXTRACTING_AUDIO"
    TRANSCRIBING = "TRANSCRIBING"
    NORMALIZING = "NORMALIZING"
    PERSISTED = "PERSISTED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

# ── Error codes ───────────────────────────────────────────────────────
class ErrorCode:
    # Non-retryable
    INVALID_MEDIA = "ERR_INVALID_MEDIA"
    TOOL_MISSING = "ERR_TOOL_MISSING"
    TOOL_NOT_FOUND = "ERR_TOOL_NOT_FOUND"
    UNEXPECTED = "ERR_UNEXPECTED"

    # Retryable
    TOOL_FAILED = "ERR_TOOL_FAILED"
    AUDIO_EXTRACTION = "ERR_AUDIO_EXTRACTION"
    TRANSCRIBE_FAILED = "ERR_TRANSCRIBE_FAILED"
    NETWORK_TRANSIENT = "ERR_NETWORK_TRANSIENT"

RETRYABLE_ERRORS = {
    ErrorCode.TOOL_FAILED,
    ErrorCode.AUDIO_EXTRACTION,
    ErrorCode.TRANSCRIBE_FAILED,
    ErrorCode.NETWORK_TRANSIENT,
}

MISSING_DEPENDENCY_ERRORS = {
    ErrorCode.TOOL_MISSING,
    ErrorCode.TOOL_NOT_FOUND,
}

# ── Audio extraction target ───────────────────────────────────────────
FFMPEG_BIN = "ffmpeg"
AUDIO_CHANNELS = 1
AUDIO_SAMPLE_RATE = 16000
AUDIO_CODEC = "pcm_s16le"
AUDIO_SUFFIX = ".wav"

# ── Upload boundary ───────────────────────────────────────────────────
MAX_UPLOAD_BYTES = 25 * 1024 * 1024     # 25MB
VIDEO_MIME_PREFIX = "video/"

# ── Artifacts ─────────────────────────────────────────────────────────
RETENTION_SEC = 5 * 60
OUTPUT_URL_PREFIX = "/downloads"
OUTPUT_SUFFIX = "-subtitles.srt"

# ── Retry policy ──────────────────────────────────────────────────────
TOOL_RETRY_ATTEMPTS = 3
RETRY_BASE_DELAY_SEC = 1.0

# ── Workers ───────────────────────────────────────────────────────────
MAX_WORKERS = 4

# ── Transcription backends ────────────────────────────────────────────
class TranscriberBackend:
    WHISPER_CPP = "whisper_cpp"
    OPENAI = "openai"

OPENAI_API_BASE = "https://api.openai.com/v1"
OPENAI_WHISPER_MODEL = "whisper-1"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

# Characters forbidden in upload filenames
UNSAFE_FILENAME_CHARS = r'[<>:"/\\|?*\x00-\x1f]'
MAX_FILENAME_LEN = 120
