"""
Job queue: runs subtitle jobs concurrently on a worker pool.
Each job owns its own file paths; the pool only shares the output area.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from subtitler.core.constants import MAX_WORKERS
from subtitler.core.models import MediaJob
from subtitler.core.pipeline import SubtitlePipeline
from subtitler.core.error_codes import JobError, describe_failure, error_details

logger = logging.getLogger(__name__)


@dataclass
class JobResult:
    job_id: str
    reference: Optional[str] = None
    error: Optional[str] = None
    details: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> dict:
        """Body for the serving layer: {"srtUrl": ...} or {"error": ..., "details": ...}."""
        if self.ok:
            return {'srtUrl': self.reference}
        return {'error': self.error, 'details': self.details}


class SubtitleJobQueue:
    """Submits MediaJobs to a SubtitlePipeline on a thread pool."""

    def __init__(self, pipeline: SubtitlePipeline, max_workers: int = MAX_WORKERS):
        self.pipeline = pipeline
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="subtitle-job")

    def submit(self, job: MediaJob) -> Future:
        """Queue a job; the future resolves to a JobResult."""
        logger.info("Queued job %s (%s)", job.id, job.original_name)
        return self._executor.submit(self.process, job)

    def process(self, job: MediaJob) -> JobResult:
        """Run a job to completion on the calling thread."""
        try:
            artifact = self.pipeline.run(job)
        except JobError as e:
            return JobResult(job_id=job.id,
                             error=describe_failure(e),
                             details=error_details(e))
        return JobResult(job_id=job.id, reference=artifact.reference)

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)
