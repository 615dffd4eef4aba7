"""Fail-fast checks that must pass before anything is started."""

from __future__ import annotations

import logging
import shutil
from typing import Callable, Optional

from .errors import PreconditionError
from .settings import PORT_VARIABLE, SupervisorSettings

logger = logging.getLogger(__name__)

_MAX_PORT = 65535

ExecutableResolver = Callable[[str], Optional[str]]


def validate_port(settings: SupervisorSettings) -> int:
    """Return the configured port or raise if it is absent or out of range."""
    if settings.port is None:
        raise PreconditionError.missing_variable(PORT_VARIABLE)
    if not 0 < settings.port <= _MAX_PORT:
        raise PreconditionError.invalid_port(PORT_VARIABLE, settings.port)
    return settings.port


def validate_environment(settings: SupervisorSettings, *, which: ExecutableResolver = shutil.which) -> None:
    """
    Confirm configuration, filesystem and executable preconditions.

    Args:
        settings: Resolved supervisor settings
        which: Resolver used to look executables up on ``PATH``

    Raises:
        PreconditionError: On the first missing item
    """
    validate_port(settings)

    if not settings.crontab_path.is_file():
        raise PreconditionError.missing_file("crontab configuration", settings.crontab_path)
    if not settings.endpoints_dir.is_dir():
        raise PreconditionError.missing_file("application files", settings.endpoints_dir)

    for executable in settings.required_executables:
        resolved = which(executable)
        if resolved is None:
            raise PreconditionError.missing_executable(executable)
        logger.debug("Resolved %s -> %s", executable, resolved)

    logger.debug("Environment validation passed")


__all__ = ["validate_environment", "validate_port"]
