"""
Data models (plain dataclasses) for SubtitleForge.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import uuid

from subtitler.core.constants import JobStage, JobStatus, AUDIO_SUFFIX


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Artifact:
    path: Path
    reference: str                   # public /downloads/<name>
    created_at: str = field(default_factory=_now)
    expires_at: Optional[str] = None


@dataclass
class MediaJob:
    source_path: Path
    original_name: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_now)
    status: str = JobStatus.QUEUED
    stage: str = JobStage.RECEIVED
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    completed_at: Optional[str] = None
    # set once the SRT is written
    artifact: Optional[Artifact] = None

    @property
    def audio_path(self) -> Path:
        # sibling of the upload, so it inherits the job's unique name
        return self.source_path.with_name(self.source_path.name + AUDIO_SUFFIX)

