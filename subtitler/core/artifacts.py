"""
Artifact lifecycle: persist SRT output and expire it after a retention window.
"""

import os
import time
import uuid
import logging
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

from subtitler.core.cleanup import remove_file
from subtitler.core.models import Artifact
from subtitler.core.security_utils import is_within
from subtitler.core.constants import (
    RETENTION_SEC, OUTPUT_URL_PREFIX, OUTPUT_SUFFIX,
)

logger = logging.getLogger(__name__)


class ArtifactManager:
    """
    Owns generated subtitle files from creation until expiry.
    Each scheduled deletion is an independent daemon timer, tracked by
    reference so it can be inspected or cancelled.
    """

    def __init__(self, output_dir: Path, retention_sec: float = RETENTION_SEC,
                 url_prefix: str = OUTPUT_URL_PREFIX):
        self.output_dir = Path(output_dir)
        self.retention_sec = retention_sec
        self.url_prefix = url_prefix.rstrip('/')
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    # ── Persistence ───────────────────────────────────────────────────

    def persist(self, text: str) -> Artifact:
        """Write `text` to a uniquely named .srt file and return its Artifact."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{OUTPUT_SUFFIX}"
        path = self.output_dir / name

        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        artifact = Artifact(path=path, reference=f"{self.url_prefix}/{name}")
        logger.info("Wrote subtitles: %s", path)
        return artifact

    def resolve(self, reference: str) -> Path:
        """Map a public reference back to its file under output_dir."""
        name = reference
        if name.startswith(self.url_prefix + '/'):
            name = name[len(self.url_prefix) + 1:]
        candidate = self.output_dir / name
        if not name or not is_within(self.output_dir, candidate):
            raise ValueError(f"Reference outside output area: {reference!r}")
        return candidate

    # ── Expiry ────────────────────────────────────────────────────────

    def schedule_expiry(self, reference: str, delay: float | None = None) -> threading.Timer:
        """Delete the artifact behind `reference` after `delay` seconds."""
        delay = self.retention_sec if delay is None else delay
        path = self.resolve(reference)

        timer = threading.Timer(delay, self._expire, args=(reference, path))
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(reference, None)
            self._timers[reference] = timer
        if previous is not None:
            previous.cancel()
        timer.start()

        logger.info("Scheduled deletion of %s in %.0fs", reference, delay)
        return timer

    def expires_at(self, delay: float | None = None) -> str:
        delay = self.retention_sec if delay is None else delay
        return (datetime.now(timezone.utc) + timedelta(seconds=delay)).isoformat()

    def _expire(self, reference: str, path: Path):
        with self._lock:
            self._timers.pop(reference, None)
        if remove_file(path):
            logger.info("Expired subtitles: %s", reference)
        else:
            logger.warning("Could not delete expired subtitles %s (%s)", reference, path)

    def pending(self) -> list[str]:
        with self._lock:
            return list(self._timers)

    def cancel(self, reference: str) -> bool:
        """Cancel a pending deletion. The file is kept."""
        with self._lock:
            timer = self._timers.pop(reference, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def shutdown(self, purge: bool = False):
        """Cancel every pending timer; with purge, delete their files now."""
        with self._lock:
            timers = dict(self._timers)
            self._timers.clear()
        for reference, timer in timers.items():
            timer.cancel()
            if purge:
                remove_file(self.resolve(reference))
        if timers:
            logger.info("Cancelled %d pending deletions (purge=%s)", len(timers), purge)
