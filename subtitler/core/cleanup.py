"""
Cleanup: delete job files after completion (success or failure).
"""

import logging
from pathlib import Path

from subtitler.core.models import MediaJob

logger = logging.getLogger(__name__)


def remove_file(path: Path) -> bool:
    """
    Best-effort delete. Returns True if a file was removed.
    A missing file is not an error; any other failure is logged, never raised.
    """
    try:
        path.unlink()
        logger.debug("Deleted: %s", path)
        return True
    except FileNotFoundError:
        logger.debug("Already gone: %s", path)
    except Exception as e:
        logger.warning("Failed to delete %s: %s", path, e)
    return False


def cleanup_job_files(job: MediaJob):
    """Delete the uploaded source and its extracted audio."""
    remove_file(job.audio_path)
    remove_file(job.source_path)
