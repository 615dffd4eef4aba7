"""Events delivered into the supervisor loop and the states it moves through."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from ..service_launcher_helpers import exit_code_from_returncode


class SupervisorState(Enum):
    STARTING = "starting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class ShutdownState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ServiceExited:
    """A tracked service exited on its own."""

    service_name: str
    returncode: int

    @property
    def exit_code(self) -> int:
        return exit_code_from_returncode(self.returncode)

    def describe(self) -> str:
        return f"{self.service_name} exited with code {self.returncode}"


@dataclass(frozen=True)
class ShutdownRequested:
    """A termination signal (or an equivalent caller) asked for shutdown."""

    signal_name: str

    @property
    def exit_code(self) -> int:
        return 0

    def describe(self) -> str:
        return f"received {self.signal_name}"


SupervisorEvent = Union[ServiceExited, ShutdownRequested]


@dataclass(frozen=True)
class ShutdownOutcome:
    """Result of the one shutdown sequence run."""

    trigger: SupervisorEvent
    stopped_cleanly: bool
    survivors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def exit_code(self) -> int:
        return self.trigger.exit_code


__all__ = [
    "ServiceExited",
    "ShutdownOutcome",
    "ShutdownRequested",
    "ShutdownState",
    "SupervisorEvent",
    "SupervisorState",
]
