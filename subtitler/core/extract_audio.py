"""
Audio extraction using ffmpeg.
Target: mono, 16kHz, 16-bit PCM WAV (what whisper.cpp expects).
"""

import logging
from pathlib import Path

from subtitler.core.tool_runner import run_tool
from subtitler.core.error_codes import ToolError
from subtitler.core.constants import (
    ErrorCode, FFMPEG_BIN, AUDIO_CHANNELS, AUDIO_SAMPLE_RATE, AUDIO_CODEC,
)

logger = logging.getLogger(__name__)


def extract_audio(input_path: Path, output_path: Path,
                  ffmpeg: str = FFMPEG_BIN) -> Path:
    """
    Strip the video stream and downmix to mono 16kHz PCM.
    Returns path to the extracted file.
    """
    args = [
        "-y",                               # overwrite (safe to retry)
        "-i", str(input_path),
        "-vn",                              # drop video
        "-acodec", AUDIO_CODEC,             # 16-bit PCM
        "-ar", str(AUDIO_SAMPLE_RATE),      # 16kHz
        "-ac", str(AUDIO_CHANNELS),         # mono
        str(output_path),
    ]

    logger.info("Extracting audio: %s", input_path)
    run_tool(ffmpeg, args, error_code=ErrorCode.AUDIO_EXTRACTION)

    if not output_path.exists():
        raise ToolError(ErrorCode.AUDIO_EXTRACTION,
                        f"ffmpeg exited cleanly but {output_path.name} was not created")

    logger.info("Extracted audio: %s", output_path)
    return output_path
