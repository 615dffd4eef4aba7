"""Run one-shot application scripts as child processes."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

logger = logging.getLogger(__name__)


async def run_script(command: Sequence[str], *, merge_stderr: bool = False) -> int:
    """
    Run *command* to completion and return its exit status.

    Output is inherited so it lands in the container log stream. With
    ``merge_stderr`` the child's stderr is folded into its stdout.

    Raises:
        OSError: If the command cannot be spawned
    """
    stderr = asyncio.subprocess.STDOUT if merge_stderr else None
    logger.debug("Running %s", " ".join(command))
    process = await asyncio.create_subprocess_exec(*command, stderr=stderr)
    return await process.wait()


__all__ = ["run_script"]
