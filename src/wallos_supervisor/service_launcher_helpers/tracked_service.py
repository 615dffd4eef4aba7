"""A launched service process and its liveness probe."""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass
from typing import Optional, Tuple

import psutil

logger = logging.getLogger(__name__)


def exit_code_from_returncode(returncode: int) -> int:
    """Map a child return code to a process exit status (``128 + signum`` for signals)."""
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


@dataclass
class TrackedService:
    """A service started by the launcher and owned by the supervisor afterwards."""

    name: str
    command: Tuple[str, ...]
    stop_signal: signal.Signals
    process: asyncio.subprocess.Process

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def returncode(self) -> Optional[int]:
        return self.process.returncode

    def is_alive(self) -> bool:
        """Return ``True`` while the pid still refers to a running (non-zombie) process."""
        if self.process.returncode is not None:
            return False
        try:
            return psutil.Process(self.pid).status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:  # policy_guard: allow-silent-handler
            return False

    def send_stop_signal(self) -> bool:
        """Deliver the service's graceful-stop signal; ``False`` if it was already gone."""
        return self.send_signal(self.stop_signal)

    def send_signal(self, signum: signal.Signals) -> bool:
        try:
            self.process.send_signal(signum)
        except ProcessLookupError:  # policy_guard: allow-silent-handler
            logger.debug("%s (PID %s) exited before %s could be delivered", self.name, self.pid, signum.name)
            return False
        return True

    async def wait(self) -> int:
        """Wait for the process to exit and return its raw return code."""
        return await self.process.wait()


__all__ = ["TrackedService", "exit_code_from_returncode"]
