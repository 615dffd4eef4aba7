"""Stop every tracked service and wait a bounded time for them to exit."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Sequence, Tuple

from ..service_launcher_helpers import TrackedService

logger = logging.getLogger(__name__)


def send_stop_signals(services: Sequence[TrackedService]) -> None:
    """Send each live service its own graceful-stop signal."""
    for service in services:
        if not service.is_alive():
            continue
        logger.info("Sending %s to %s (PID %s)", service.stop_signal.name, service.name, service.pid)
        service.send_stop_signal()


def alive_services(services: Sequence[TrackedService]) -> Tuple[TrackedService, ...]:
    return tuple(service for service in services if service.is_alive())


async def drain(services: Sequence[TrackedService], *, timeout_seconds: float, interval_seconds: float) -> Tuple[str, ...]:
    """
    Poll liveness once per interval until every service is gone or the deadline passes.

    Returns:
        Names of services still alive when the deadline elapsed (empty on success)
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_seconds
    while True:
        survivors = alive_services(services)
        if not survivors:
            return ()
        remaining = deadline - loop.time()
        if remaining <= 0:
            return tuple(service.name for service in survivors)
        await asyncio.sleep(min(interval_seconds, remaining))


def force_kill(services: Sequence[TrackedService]) -> None:
    for service in alive_services(services):
        logger.warning("Sending SIGKILL to %s (PID %s)", service.name, service.pid)
        service.send_signal(signal.SIGKILL)


async def run_shutdown_sequence(
    services: Sequence[TrackedService],
    *,
    timeout_seconds: float,
    interval_seconds: float,
    force_kill_on_timeout: bool = False,
) -> Tuple[str, ...]:
    """
    Signal all services, then drain.

    Stop signals are all sent before any waiting starts. Survivors past the
    deadline are only reported unless ``force_kill_on_timeout`` is set.

    Returns:
        Names of services that outlived the deadline
    """
    send_stop_signals(services)
    survivors = await drain(services, timeout_seconds=timeout_seconds, interval_seconds=interval_seconds)
    if not survivors:
        logger.info("All services stopped gracefully")
        return ()

    logger.warning("Some services did not stop within %ss: %s", timeout_seconds, ", ".join(survivors))
    if force_kill_on_timeout:
        force_kill(services)
    return survivors


__all__ = ["alive_services", "drain", "force_kill", "run_shutdown_sequence", "send_stop_signals"]
