"""
Standardised error handling for SubtitleForge.
"""

from subtitler.core.constants import (
    ErrorCode, RETRYABLE_ERRORS, MISSING_DEPENDENCY_ERRORS,
)

_STREAM_TAIL_CHARS = 300

GENERIC_FAILURE_MESSAGE = "Error generating subtitles"
MISSING_DEPENDENCY_MESSAGE = (
    "Required tools not found. Check the ffmpeg and whisper.cpp installation "
    "and the paths in config.json."
)


class JobError(Exception):
    """Raised when a job encounters a known error condition."""

    def __init__(self, code: str, message: str, retryable: bool | None = None):
        self.code = code
        self.message = message
        # auto-detect retryable from code if not explicitly set
        self.retryable = retryable if retryable is not None else (code in RETRYABLE_ERRORS)
        super().__init__(f"[{code}] {message}")


class ToolError(JobError):
    """An external program failed to launch or exited non-zero."""

    def __init__(self, code: str, message: str,
                 returncode: int | None = None,
                 stderr: str = "", stdout: str = "",
                 retryable: bool | None = None):
        super().__init__(code, message, retryable)
        self.returncode = returncode
        self.stderr = stderr or ""
        self.stdout = stdout or ""


def is_retryable(code: str) -> bool:
    return code in RETRYABLE_ERRORS


def _tail(text: str) -> str:
    text = (text or "").strip()
    return text[-_STREAM_TAIL_CHARS:]


def describe_failure(error: BaseException) -> str:
    """Single user-facing message for a failed job."""
    code = getattr(error, 'code', None)
    if code in MISSING_DEPENDENCY_ERRORS:
        return MISSING_DEPENDENCY_MESSAGE
    stderr = _tail(getattr(error, 'stderr', ""))
    if stderr:
        return f"Processing error: {stderr}"
    return GENERIC_FAILURE_MESSAGE


def error_details(error: BaseException) -> dict:
    """Operator-facing diagnostics: code, message and captured streams."""
    details = {
        'code': getattr(error, 'code', ErrorCode.UNEXPECTED),
        'type': type(error).__name__,
        'message': getattr(error, 'message', str(error)),
    }
    if isinstance(error, ToolError):
        details['returncode'] = error.returncode
        details['stderr'] = _tail(error.stderr)
        details['stdout'] = _tail(error.stdout)
    return details
