#!/usr/bin/env python3
"""
SubtitleForge v1.0.0: command-line entry point.
Turns a video file into an SRT subtitle file.
"""

import sys
import shutil
import logging
import argparse
from pathlib import Path
from datetime import datetime

# ── Determine project root ────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from subtitler.core.constants import APP_NAME, APP_VERSION, LOG_DIR
from subtitler.core.config import AppConfig
from subtitler.core.error_codes import JobError
from subtitler.core.artifacts import ArtifactManager
from subtitler.core.media_check import validate_media_file, create_job
from subtitler.core.pipeline import SubtitlePipeline
from subtitler.core.job_queue import SubtitleJobQueue
from subtitler.core.transcribe_whisper import build_transcriber

logger = logging.getLogger("subtitler")


def setup_logging(verbose: bool = False):
    """Log to ~/.subtitler/logs/app.log and to stderr."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_DIR / "app.log", encoding="utf-8"))
    except OSError as e:
        print(f"Warning: file logging disabled ({e})", file=sys.stderr)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="subtitler",
        description="Generate SRT subtitle files from videos.",
    )
    parser.add_argument("videos", type=Path, nargs="+", metavar="VIDEO",
                        help="video file(s) to transcribe")
    parser.add_argument("--config", type=Path, default=None,
                        help="path to config.json")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="where to write the SRT (single video only; "
                             "default: next to the video)")
    parser.add_argument("--max-size-mb", type=int, default=None,
                        help="reject videos larger than this (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.output and len(args.videos) > 1:
        parser.error("--output can only be used with a single video")
    if args.max_size_mb is not None and args.max_size_mb < 1:
        parser.error("--max-size-mb must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger.info("%s v%s starting at %s", APP_NAME, APP_VERSION, datetime.now().isoformat())

    config = AppConfig(args.config)
    max_bytes = (args.max_size_mb * 1024 * 1024 if args.max_size_mb is not None
                 else config.max_upload_bytes)

    artifacts = ArtifactManager(config.output_dir, retention_sec=config.retention_sec)
    pipeline = SubtitlePipeline(
        build_transcriber(config),
        artifacts,
        retry_attempts=config.get('tool_retry_attempts'),
        retry_base_delay=config.get('retry_base_delay_sec'),
    )
    queue = SubtitleJobQueue(pipeline, max_workers=config.get('max_workers'))

    failures = 0
    pending = []
    try:
        for video in args.videos:
            try:
                validate_media_file(video, max_bytes=max_bytes)
                # The pipeline deletes its source, so hand it a copy of the user's file
                job = create_job(video, video.name, config.upload_dir, copy=True)
            except JobError as e:
                logger.error("Rejected %s: %s", video, e)
                print(f"Error: {video}: {e.message}", file=sys.stderr)
                failures += 1
                continue
            pending.append((video, queue.submit(job)))

        for video, future in pending:
            result = future.result()
            if not result.ok:
                print(f"Error: {video}: {result.error}", file=sys.stderr)
                failures += 1
                continue
            output = args.output or video.with_suffix(".srt")
            shutil.copyfile(artifacts.resolve(result.reference), output)
            print(output)
    finally:
        queue.shutdown()
        # The process is exiting; expire the served copies now
        artifacts.shutdown(purge=True)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
