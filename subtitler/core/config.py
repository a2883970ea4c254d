"""
Application configuration manager.
Stores settings in a JSON file under ~/.subtitler.
"""

import json
import logging
from pathlib import Path

from subtitler.core.constants import (
    CONFIG_PATH, DEFAULT_UPLOAD_DIR, DEFAULT_OUTPUT_DIR,
    DEFAULT_WHISPER_EXECUTABLE, DEFAULT_WHISPER_MODEL,
    RETENTION_SEC, TOOL_RETRY_ATTEMPTS, RETRY_BASE_DELAY_SEC, MAX_WORKERS,
    MAX_UPLOAD_BYTES,
    TranscriberBackend, OPENAI_WHISPER_MODEL,
)

# Validation bounds
_RETENTION_MIN = 10             # 10 seconds
_RETENTION_MAX = 24 * 3600      # 24 hours
_RETRY_ATTEMPTS_MIN = 1
_RETRY_ATTEMPTS_MAX = 10
_WORKERS_MIN = 1
_WORKERS_MAX = 32
_UPLOAD_BYTES_MIN = 1
_UPLOAD_BYTES_MAX = 64 * 1024 ** 3      # 64GB

logger = logging.getLogger(__name__)

_DEFAULTS = {
    'upload_dir': str(DEFAULT_UPLOAD_DIR),
    'output_dir': str(DEFAULT_OUTPUT_DIR),
    'whisper_executable': str(DEFAULT_WHISPER_EXECUTABLE),
    'whisper_model': str(DEFAULT_WHISPER_MODEL),
    'transcriber_backend': TranscriberBackend.WHISPER_CPP,
    'openai_model': OPENAI_WHISPER_MODEL,
    'retention_sec': RETENTION_SEC,
    'tool_retry_attempts': TOOL_RETRY_ATTEMPTS,
    'retry_base_delay_sec': RETRY_BASE_DELAY_SEC,
    'max_workers': MAX_WORKERS,
    'max_upload_bytes': MAX_UPLOAD_BYTES,
}


def _clamp_int(key: str, value, lo: int, hi: int, default: int) -> int:
    try:
        value = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r, using default", key, value)
        return default
    return max(lo, min(hi, value))


class AppConfig:
    """Manages application configuration stored as JSON."""

    def __init__(self, config_path: Path | None = None):
        self.path = config_path or CONFIG_PATH
        self._data: dict = {}
        self.load()

    def load(self):
        """Load config from disk, merging with defaults."""
        self._data = dict(_DEFAULTS)
        if self.path.exists():
            try:
                with open(self.path, 'r') as f:
                    saved = json.load(f)
                for key, value in saved.items():
                    self._data[key] = self._validate(key, value)
            except Exception as e:
                logger.warning("Failed to load config: %s", e)

    def save(self):
        """Persist config to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(self._data, f, indent=2)

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value):
        value = self._validate(key, value)
        self._data[key] = value
        self.save()

    def _validate(self, key: str, value):
        """Validate and coerce config values to safe ranges."""
        if key == 'retention_sec':
            return _clamp_int(key, value, _RETENTION_MIN, _RETENTION_MAX, RETENTION_SEC)

        if key == 'tool_retry_attempts':
            return _clamp_int(key, value, _RETRY_ATTEMPTS_MIN, _RETRY_ATTEMPTS_MAX,
                              TOOL_RETRY_ATTEMPTS)

        if key == 'max_workers':
            return _clamp_int(key, value, _WORKERS_MIN, _WORKERS_MAX, MAX_WORKERS)

        if key == 'max_upload_bytes':
            return _clamp_int(key, value, _UPLOAD_BYTES_MIN, _UPLOAD_BYTES_MAX,
                              MAX_UPLOAD_BYTES)

        if key == 'retry_base_delay_sec':
            try:
                return max(0.0, float(value))
            except (TypeError, ValueError):
                logger.warning("Invalid retry_base_delay_sec %r, using default", value)
                return RETRY_BASE_DELAY_SEC

        if key == 'transcriber_backend':
            if value not in (TranscriberBackend.WHISPER_CPP, TranscriberBackend.OPENAI):
                logger.warning("Invalid transcriber_backend %r, using whisper_cpp", value)
                return TranscriberBackend.WHISPER_CPP

        return value

    @property
    def upload_dir(self) -> Path:
        return Path(self._data.get('upload_dir', str(DEFAULT_UPLOAD_DIR)))

    @property
    def output_dir(self) -> Path:
        return Path(self._data.get('output_dir', str(DEFAULT_OUTPUT_DIR)))

    @property
    def max_upload_bytes(self) -> int:
        return self._data.get('max_upload_bytes', MAX_UPLOAD_BYTES)

    @property
    def retention_sec(self) -> int:
        return self._data.get('retention_sec', RETENTION_SEC)
