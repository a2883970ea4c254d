"""
External tool invocation.
Runs a program to completion and surfaces failures with the captured streams.
"""

import logging

from subtitler.core.security_utils import run_subprocess_capture
from subtitler.core.error_codes import ToolError
from subtitler.core.constants import ErrorCode

logger = logging.getLogger(__name__)


def run_tool(program: str, args: list[str],
             error_code: str = ErrorCode.TOOL_FAILED) -> str:
    """
    Run `program` with `args` and wait for it to exit.
    Returns captured stdout. No timeout is applied: long media take long.

    Raises ToolError with TOOL_NOT_FOUND if the program cannot be found,
    or with `error_code` on any other launch failure or non-zero exit.
    """
    cmd = [str(program), *(str(a) for a in args)]

    try:
        result = run_subprocess_capture(cmd)
    except FileNotFoundError as e:
        raise ToolError(ErrorCode.TOOL_NOT_FOUND,
                        f"{program} not found: {e}") from e
    except OSError as e:
        raise ToolError(error_code, f"{program} could not be started: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr or ""
        logger.error("%s exited with rc=%d: %s", program, result.returncode, stderr[-300:])
        raise ToolError(error_code,
                        f"{program} failed (rc={result.returncode}): {stderr[:300]}",
                        returncode=result.returncode,
                        stderr=stderr,
                        stdout=result.stdout or "")

    return result.stdout or ""
