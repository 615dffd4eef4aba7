"""Building blocks for the lifecycle supervisor."""

from .events import (
    ServiceExited,
    ShutdownOutcome,
    ShutdownRequested,
    ShutdownState,
    SupervisorEvent,
    SupervisorState,
)
from .shutdown_sequence import run_shutdown_sequence
from .signal_handlers import (
    IGNORED_SIGNALS,
    TERMINATION_SIGNALS,
    install_signal_handlers,
    remove_signal_handlers,
)

__all__ = [
    "IGNORED_SIGNALS",
    "TERMINATION_SIGNALS",
    "ServiceExited",
    "ShutdownOutcome",
    "ShutdownRequested",
    "ShutdownState",
    "SupervisorEvent",
    "SupervisorState",
    "install_signal_handlers",
    "remove_signal_handlers",
    "run_shutdown_sequence",
]
