"""
Security utilities for SubtitleForge.
- Filename sanitization for uploaded media
- Safe subprocess execution (argument arrays only)
- Filesystem access checks
"""

import os
import re
import subprocess
import pathlib
import logging

from subtitler.core.constants import UNSAFE_FILENAME_CHARS, MAX_FILENAME_LEN

logger = logging.getLogger(__name__)


# ── Filename / path safety ────────────────────────────────────────────

def sanitize_filename(name: str) -> str:
    """Sanitize an uploaded filename so it can be embedded in a job path."""
    if not name:
        return ""
    # Drop any directory part the client sent
    name = name.replace('\\', '/').rsplit('/', 1)[-1]
    safe = re.sub(UNSAFE_FILENAME_CHARS, '_', name)
    safe = safe.replace('..', '')
    # Collapse whitespace runs to a single underscore
    safe = re.sub(r'\s+', '_', safe).strip('_')
    if len(safe) > MAX_FILENAME_LEN:
        stem, dot, ext = safe.rpartition('.')
        if dot and len(ext) < 10:
            safe = stem[:MAX_FILENAME_LEN - len(ext) - 1] + '.' + ext
        else:
            safe = safe[:MAX_FILENAME_LEN]
    # No hidden files
    safe = safe.lstrip('.')
    return safe


def is_within(root: pathlib.Path, candidate: pathlib.Path) -> bool:
    """True when realpath(candidate) lies strictly inside realpath(root)."""
    real_root = root.resolve(strict=False)
    real_candidate = candidate.resolve(strict=False)
    return real_root in real_candidate.parents


def check_access(path: pathlib.Path, mode: int) -> bool:
    """Path exists and grants `mode` (os.R_OK / os.X_OK) to this process."""
    return path.exists() and os.access(path, mode)


# ── Subprocess safety ─────────────────────────────────────────────────

def run_subprocess(args: list[str], **kwargs) -> subprocess.CompletedProcess:
    """
    Execute a subprocess using argument arrays only.
    shell=True is explicitly forbidden.
    """
    if not isinstance(args, (list, tuple)):
        raise TypeError("Subprocess args must be a list/tuple, not a string")

    # Force shell=False: drop any caller-supplied value
    kwargs.pop('shell', None)

    logger.debug("Running subprocess: %s", ' '.join(str(a) for a in args))
    return subprocess.run(args, shell=False, **kwargs)


def run_subprocess_capture(args: list[str], timeout: float | None = None,
                           **kwargs) -> subprocess.CompletedProcess:
    """Run subprocess to completion and capture stdout/stderr as text."""
    return run_subprocess(
        args,
        capture_output=True,
        text=True,
        errors='replace',
        timeout=timeout,
        **kwargs,
    )
