"""One-time application setup run before any service starts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import InitializationError
from .script_runner import run_script
from .settings import SupervisorSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupStep:
    """A setup script together with how it is reported."""

    action: str
    progress_message: str
    script: str


# Both scripts are idempotent; container restarts run them again.
DEFAULT_SETUP_STEPS = (
    SetupStep(action="create database", progress_message="Creating database...", script="endpoints/cronjobs/createdatabase.php"),
    SetupStep(action="run migrations", progress_message="Running database migrations...", script="endpoints/db/migrate.php"),
)


class Initializer:
    """Runs the setup steps in order and stops at the first failure."""

    def __init__(self, settings: SupervisorSettings, steps: Sequence[SetupStep] = DEFAULT_SETUP_STEPS) -> None:
        self._settings = settings
        self._steps = tuple(steps)

    async def run(self) -> None:
        """
        Execute every setup step synchronously.

        Raises:
            InitializationError: If a step cannot be spawned or exits non-zero
        """
        logger.info("Initializing Wallos application...")
        for step in self._steps:
            logger.info(step.progress_message)
            try:
                returncode = await run_script(self._settings.script_command(step.script))
            except OSError as exc:
                raise InitializationError.step_failed(step.action) from exc
            if returncode != 0:
                raise InitializationError.step_failed(step.action, returncode)
        logger.info("Application initialization complete")


__all__ = ["DEFAULT_SETUP_STEPS", "Initializer", "SetupStep"]
