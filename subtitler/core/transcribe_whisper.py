"""
Speech-to-text clients.

WhisperCppClient drives a local whisper.cpp build; OpenAIWhisperClient posts
the audio to the OpenAI transcription API. Both return SRT-ish text that is
handed to the transcript normalizer. Clients are constructed explicitly and
passed to the pipeline.
"""

import os
import logging
import requests
from pathlib import Path

from subtitler.core.tool_runner import run_tool
from subtitler.core.error_codes import JobError
from subtitler.core.security_utils import check_access
from subtitler.core.constants import (
    ErrorCode, TranscriberBackend,
    OPENAI_API_BASE, OPENAI_WHISPER_MODEL, OPENAI_API_KEY_ENV,
)

logger = logging.getLogger(__name__)


class WhisperCppClient:
    """Local whisper.cpp CLI (`whisper-cli -m <model> -f <wav> -of srt`)."""

    def __init__(self, executable: Path, model: Path):
        self.executable = Path(executable)
        self.model = Path(model)

    def check_install(self):
        """Fail fast if the executable or model is missing or inaccessible."""
        logger.info("Whisper executable: %s", self.executable)
        logger.info("Whisper model: %s", self.model)

        if not check_access(self.executable, os.X_OK):
            raise JobError(ErrorCode.TOOL_MISSING,
                           f"Whisper executable not found or not executable: {self.executable}")
        if not check_access(self.model, os.R_OK):
            raise JobError(ErrorCode.TOOL_MISSING,
                           f"Whisper model not found or not readable: {self.model}")

    def transcribe(self, audio_path: Path) -> str:
        args = [
            "-m", str(self.model),
            "-f", str(audio_path),
            "-of", "srt",
        ]
        stdout = run_tool(str(self.executable), args,
                          error_code=ErrorCode.TRANSCRIBE_FAILED)
        logger.info("Transcribed %s (%d chars)", audio_path.name, len(stdout))
        return stdout


class OpenAIWhisperClient:
    """Hosted Whisper via the OpenAI audio transcription endpoint."""

    def __init__(self, api_key: str | None, model: str = OPENAI_WHISPER_MODEL,
                 api_base: str = OPENAI_API_BASE, timeout: float = 600):
        self.api_key = api_key
        self.model = model
        self.url = f"{api_base.rstrip('/')}/audio/transcriptions"
        self.timeout = timeout

    def check_install(self):
        if not self.api_key:
            raise JobError(ErrorCode.TOOL_MISSING,
                           f"OpenAI API key not set (expected in ${OPENAI_API_KEY_ENV})")

    def transcribe(self, audio_path: Path) -> str:
        try:
            with open(audio_path, 'rb') as f:
                resp = requests.post(
                    self.url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    data={"model": self.model, "response_format": "srt"},
                    files={"file": (audio_path.name, f, "audio/wav")},
                    timeout=self.timeout,
                )
        except requests.exceptions.Timeout:
            raise JobError(ErrorCode.NETWORK_TRANSIENT,
                           "OpenAI request timed out", retryable=True)
        except requests.exceptions.ConnectionError:
            raise JobError(ErrorCode.NETWORK_TRANSIENT,
                           "Network error connecting to OpenAI", retryable=True)
        except requests.exceptions.RequestException as e:
            raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                           f"OpenAI request failed: {e}", retryable=True)
        except OSError as e:
            raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                           f"Could not read {audio_path}: {e}", retryable=False)

        if resp.status_code == 429 or resp.status_code >= 500:
            raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                           f"OpenAI returned {resp.status_code}", retryable=True)

        if resp.status_code != 200:
            # Never log the key; body is trimmed
            error_body = resp.text[:300] if resp.text else "No response body"
            raise JobError(ErrorCode.TRANSCRIBE_FAILED,
                           f"OpenAI returned {resp.status_code}: {error_body}",
                           retryable=False)

        logger.info("Transcribed %s via OpenAI (%d chars)", audio_path.name, len(resp.text))
        return resp.text


def build_transcriber(config) -> WhisperCppClient | OpenAIWhisperClient:
    """Construct the transcription client selected in config."""
    backend = config.get('transcriber_backend', TranscriberBackend.WHISPER_CPP)
    if backend == TranscriberBackend.OPENAI:
        return OpenAIWhisperClient(
            api_key=os.environ.get(OPENAI_API_KEY_ENV),
            model=config.get('openai_model', OPENAI_WHISPER_MODEL),
        )
    return WhisperCppClient(
        executable=Path(config.get('whisper_executable')),
        model=Path(config.get('whisper_model')),
    )
