"""Best-effort maintenance scripts started alongside the services.

The scheduler runs the same scripts on its own timetable, so a failure here
only delays fresh data until the next scheduled run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .script_runner import run_script
from .settings import SupervisorSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupTask:
    action: str
    script: str


DEFAULT_STARTUP_TASKS = (
    StartupTask(action="update payment dates", script="endpoints/cronjobs/updatenextpayment.php"),
    StartupTask(action="update exchange rates", script="endpoints/cronjobs/updateexchange.php"),
    StartupTask(action="check for updates", script="endpoints/cronjobs/checkforupdates.php"),
)


class BackgroundTaskRunner:
    """Fire-and-forget runner for startup maintenance scripts."""

    def __init__(self, settings: SupervisorSettings, tasks: Sequence[StartupTask] = DEFAULT_STARTUP_TASKS) -> None:
        self._settings = settings
        self._tasks = tuple(tasks)
        self._task: Optional[asyncio.Task] = None

    def start(self) -> asyncio.Task:
        """Schedule the scripts on the running loop without waiting for them."""
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="startup-tasks")
        return self._task

    async def run(self) -> None:
        """Run every script in order; failures are logged and skipped."""
        logger.info("Running startup tasks...")
        for task in self._tasks:
            command = self._settings.script_command(task.script)
            try:
                returncode = await run_script(command, merge_stderr=True)
            except OSError as exc:  # policy_guard: allow-silent-handler
                logger.warning("Failed to %s (will retry via cron): %s", task.action, exc)
                continue
            if returncode != 0:
                logger.warning("Failed to %s (will retry via cron), exit code %s", task.action, returncode)
        logger.info("Startup tasks complete")


__all__ = ["BackgroundTaskRunner", "DEFAULT_STARTUP_TASKS", "StartupTask"]
