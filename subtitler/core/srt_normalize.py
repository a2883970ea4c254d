"""
Transcript normalization → SRT.

Transcriber output is loosely structured: timing lines may be wrapped in
brackets, use '.' or ',' before the milliseconds, and carry their text on
the same line or on the next one. Everything else is noise. This module
recovers a strictly numbered SRT track from it and never raises; the worst
case is an empty track.
"""

import re
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TIMING_MARKER = '-->'

_TIMING_RE = re.compile(
    r'\[?(\d{2}:\d{2}:\d{2}[,.]\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2}[,.]\d{3})\]?\s*(.*)'
)


@dataclass
class SubtitleCue:
    index: int
    start: str          # hh:mm:ss,mmm
    end: str            # hh:mm:ss,mmm
    text: str

    def to_block(self) -> str:
        return f"{self.index}\n{self.start} {TIMING_MARKER} {self.end}\n{self.text}\n"


def canonical_timestamp(ts: str) -> str:
    """00:00:01.000 → 00:00:01,000"""
    return ts.replace('.', ',')


def strip_decoration(text: str) -> str:
    """
    Remove a leading run of non-alphanumeric characters (bullets, dashes,
    speaker-turn markers, whitespace) and trailing whitespace.
    Idempotent on already-clean text.
    """
    i = 0
    while i < len(text) and not text[i].isalnum():
        i += 1
    return text[i:].strip()


def parse_transcript(raw: str) -> list[SubtitleCue]:
    """Parse raw transcriber output into sequentially numbered cues."""
    lines = (raw or '').splitlines()
    cues: list[SubtitleCue] = []
    counter = 1
    skipped = 0

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1

        if not line or TIMING_MARKER not in line:
            continue

        match = _TIMING_RE.search(line)
        if not match:
            skipped += 1
            continue

        start = canonical_timestamp(match.group(1))
        end = canonical_timestamp(match.group(2))
        text = match.group(3).strip()

        # Text on the following line; consume at most one line
        if not text and i < len(lines) and TIMING_MARKER not in lines[i]:
            text = lines[i].strip()
            i += 1

        text = strip_decoration(text)
        if not text:
            skipped += 1
            continue

        cues.append(SubtitleCue(index=counter, start=start, end=end, text=text))
        counter += 1

    if skipped:
        logger.debug("Dropped %d timing lines without usable text", skipped)
    return cues


def render_srt(cues: list[SubtitleCue]) -> str:
    """Serialize cues as SRT blocks, each followed by a blank line."""
    return ''.join(cue.to_block() + '\n' for cue in cues)


def normalize_transcript(raw: str) -> str:
    cues = parse_transcript(raw)
    logger.info("Normalized transcript: %d cues", len(cues))
    return render_srt(cues)
