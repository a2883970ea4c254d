"""
Subtitle pipeline: one upload → one SRT artifact.

Stages run strictly in order:
RECEIVED → EXTRACTING_AUDIO → TRANSCRIBING → NORMALIZING → PERSISTED → COMPLETED
Any failure moves the job to FAILED after best-effort removal of its files.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from subtitler.core.constants import JobStage, JobStatus, ErrorCode
from subtitler.core.models import MediaJob, Artifact
from subtitler.core.error_codes import JobError
from subtitler.core.retry import retry_with_backoff
from subtitler.core.extract_audio import extract_audio
from subtitler.core.srt_normalize import normalize_transcript
from subtitler.core.artifacts import ArtifactManager
from subtitler.core.cleanup import remove_file, cleanup_job_files

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, JobError) and exc.retryable


class SubtitlePipeline:
    """
    Runs a MediaJob through extraction, transcription and normalization.
    The transcriber is any object with check_install() and
    transcribe(audio_path) -> str.
    """

    def __init__(self, transcriber, artifacts: ArtifactManager,
                 retry_attempts: int = 3, retry_base_delay: float = 1.0,
                 sleep: Callable[[float], None] = time.sleep):
        self.transcriber = transcriber
        self.artifacts = artifacts
        self.retry_attempts = retry_attempts
        self.retry_base_delay = retry_base_delay
        self._sleep = sleep

        self.on_job_updated: Optional[Callable[[MediaJob], None]] = None

    def _set_stage(self, job: MediaJob, stage: str, status: str = JobStatus.RUNNING):
        job.stage = stage
        job.status = status
        logger.info("Job %s: %s", job.id, stage)
        if self.on_job_updated:
            try:
                self.on_job_updated(job)
            except Exception as e:
                logger.error("Job update callback failed for %s: %s", job.id, e)

    def _with_retry(self, operation):
        return retry_with_backoff(
            operation,
            max_attempts=self.retry_attempts,
            base_delay=self.retry_base_delay,
            should_retry=_is_retryable,
            sleep=self._sleep,
        )

    # ── Job processing pipeline ───────────────────────────────────────

    def run(self, job: MediaJob) -> Artifact:
        """Process a job. Returns the persisted artifact or raises JobError."""
        try:
            return self._run_stages(job)
        except JobError as e:
            self._handle_job_error(job, e)
            raise
        except Exception as e:
            logger.error("Unexpected error processing job %s: %s", job.id, e, exc_info=True)
            error = JobError(ErrorCode.UNEXPECTED, str(e)[:2000], retryable=False)
            self._handle_job_error(job, error)
            raise error from e

    def _run_stages(self, job: MediaJob) -> Artifact:
        self._set_stage(job, JobStage.RECEIVED)

        # ── Stage 1: Extract audio ──
        self._set_stage(job, JobStage.EXTRACTING_AUDIO)
        audio_path = self._with_retry(lambda: extract_audio(job.source_path, job.audio_path))

        # ── Stage 2: Transcribe ──
        self._set_stage(job, JobStage.TRANSCRIBING)
        self.transcriber.check_install()
        raw = self._with_retry(lambda: self.transcriber.transcribe(audio_path))

        # ── Stage 3: Normalize ──
        self._set_stage(job, JobStage.NORMALIZING)
        srt_text = normalize_transcript(raw)

        # ── Stage 4: Persist ──
        artifact = self.artifacts.persist(srt_text)
        job.artifact = artifact
        self._set_stage(job, JobStage.PERSISTED)

        # ── Stage 5: Cleanup and schedule expiry ──
        remove_file(job.audio_path)
        remove_file(job.source_path)
        self.artifacts.schedule_expiry(artifact.reference)
        artifact.expires_at = self.artifacts.expires_at()

        job.completed_at = datetime.now(timezone.utc).isoformat()
        self._set_stage(job, JobStage.COMPLETED, JobStatus.COMPLETED)
        return artifact

    def _handle_job_error(self, job: MediaJob, error: JobError):
        """Record the failure and remove the job's files. Never raises."""
        logger.error("Job %s failed in %s: %s", job.id, job.stage, error)
        job.error_code = error.code
        job.error_message = error.message[:2000]
        try:
            cleanup_job_files(job)
        except Exception as e:
            logger.error("Error cleaning up files for job %s: %s", job.id, e)
        if job.artifact is not None:
            # A failed job leaves no output behind, scheduled or not
            try:
                self.artifacts.cancel(job.artifact.reference)
                remove_file(job.artifact.path)
            except Exception as e:
                logger.error("Error removing output for job %s: %s", job.id, e)
        self._set_stage(job, JobStage.FAILED, JobStatus.FAILED)
