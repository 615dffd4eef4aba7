"""Register supervisor signal handling on the event loop."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Callable, List

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGINT, signal.SIGQUIT)
IGNORED_SIGNALS = (signal.SIGHUP,)


def _ignore_signal(signum: signal.Signals) -> None:
    logger.debug("Ignoring %s; configuration reload is not supported", signum.name)


def install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    on_termination: Callable[[signal.Signals], None],
) -> List[signal.Signals]:
    """
    Route termination signals to *on_termination* and register SIGHUP as a no-op.

    The callbacks run on the loop, never inside the raw signal context.

    Returns:
        Signals that now have a loop handler, for later removal
    """
    installed: List[signal.Signals] = []
    for signum in TERMINATION_SIGNALS:
        loop.add_signal_handler(signum, on_termination, signum)
        installed.append(signum)
    for signum in IGNORED_SIGNALS:
        loop.add_signal_handler(signum, _ignore_signal, signum)
        installed.append(signum)
    return installed


def remove_signal_handlers(loop: asyncio.AbstractEventLoop, signals: List[signal.Signals]) -> None:
    for signum in signals:
        loop.remove_signal_handler(signum)


__all__ = ["IGNORED_SIGNALS", "TERMINATION_SIGNALS", "install_signal_handlers", "remove_signal_handlers"]
