"""
Upload boundary: reject unsupported media and give each accepted upload
its own job path.
"""

import time
import shutil
import logging
import mimetypes
from pathlib import Path

from subtitler.core.models import MediaJob
from subtitler.core.error_codes import JobError
from subtitler.core.security_utils import sanitize_filename
from subtitler.core.constants import ErrorCode, MAX_UPLOAD_BYTES, VIDEO_MIME_PREFIX

logger = logging.getLogger(__name__)


def is_video_mimetype(mimetype: str | None) -> bool:
    return bool(mimetype) and mimetype.startswith(VIDEO_MIME_PREFIX)


def validate_media_file(path: Path, mimetype: str | None = None,
                        max_bytes: int = MAX_UPLOAD_BYTES,
                        filename: str | None = None):
    """
    Raise JobError(INVALID_MEDIA) unless `path` is a non-empty video upload
    no larger than `max_bytes`. Without an explicit mimetype the type is
    guessed from `filename` (or the path name).
    """
    if not path.is_file():
        raise JobError(ErrorCode.INVALID_MEDIA, "No video file uploaded")

    if mimetype is None:
        mimetype, _ = mimetypes.guess_type(filename or path.name)
    if not is_video_mimetype(mimetype):
        raise JobError(ErrorCode.INVALID_MEDIA, f"Not a video file ({mimetype or 'unknown type'})")

    size = path.stat().st_size
    if size == 0:
        raise JobError(ErrorCode.INVALID_MEDIA, "Uploaded file is empty")
    if size > max_bytes:
        raise JobError(ErrorCode.INVALID_MEDIA,
                       f"File too large ({size} bytes, limit {max_bytes})")


def create_job(upload_path: Path, original_name: str, upload_dir: Path,
               copy: bool = False) -> MediaJob:
    """
    Move (or copy) an accepted upload to
    <upload_dir>/<epoch-ms>-<job8>-<sanitized name> and return its job.
    """
    upload_dir.mkdir(parents=True, exist_ok=True)

    job = MediaJob(source_path=upload_path, original_name=original_name)
    safe_name = sanitize_filename(original_name) or "upload"
    job.source_path = upload_dir / f"{int(time.time() * 1000)}-{job.id[:8]}-{safe_name}"

    if copy:
        shutil.copyfile(upload_path, job.source_path)
    else:
        shutil.move(str(upload_path), str(job.source_path))

    logger.info("Accepted upload %s as job %s", original_name, job.id)
    return job
