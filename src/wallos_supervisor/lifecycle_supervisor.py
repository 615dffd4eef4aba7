"""
Lifecycle supervisor: wait for the first trigger, then shut everything down once.

Signal handlers and per-service exit watchers only enqueue events. The
supervisor takes the first event off the queue as the shutdown trigger and
runs the shutdown sequence exactly once, however many further triggers
arrive while it runs.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Iterable, List, Optional, Sequence, Tuple

from .lifecycle_supervisor_helpers import (
    ServiceExited,
    ShutdownOutcome,
    ShutdownRequested,
    ShutdownState,
    SupervisorEvent,
    SupervisorState,
    install_signal_handlers,
    remove_signal_handlers,
    run_shutdown_sequence,
)
from .service_launcher_helpers import TrackedService
from .settings import SupervisorSettings

logger = logging.getLogger(__name__)


class LifecycleSupervisor:
    """Owns the tracked services, the event queue and the shutdown guard."""

    def __init__(self, settings: SupervisorSettings) -> None:
        self._settings = settings
        self._events: "asyncio.Queue[SupervisorEvent]" = asyncio.Queue()
        self._services: Tuple[TrackedService, ...] = ()
        self._watchers: List[asyncio.Task] = []
        self._side_tasks: List[asyncio.Task] = []
        self._installed_signals: List[signal.Signals] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._state = SupervisorState.STARTING
        self._shutdown_state = ShutdownState.NOT_STARTED
        self._shutdown_done: Optional[asyncio.Future] = None
        self._shutdown_requested = False
        self.shutdown_runs = 0

    @property
    def state(self) -> SupervisorState:
        return self._state

    @property
    def shutdown_state(self) -> ShutdownState:
        return self._shutdown_state

    @property
    def shutdown_requested(self) -> bool:
        """``True`` once any termination request has been queued."""
        return self._shutdown_requested

    @property
    def services(self) -> Tuple[TrackedService, ...]:
        return self._services

    def install_signal_handlers(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Route termination signals into the event queue. Call before launching services."""
        self._loop = loop or asyncio.get_running_loop()
        self._installed_signals = install_signal_handlers(self._loop, self._on_signal)

    def remove_signal_handlers(self) -> None:
        if self._loop is not None and self._installed_signals:
            remove_signal_handlers(self._loop, self._installed_signals)
        self._installed_signals = []

    def _on_signal(self, signum: signal.Signals) -> None:
        logger.info("Received %s", signum.name)
        self.request_shutdown(signum.name)

    def request_shutdown(self, reason: str = "shutdown request") -> None:
        """Queue a shutdown request; safe to call any number of times."""
        self._shutdown_requested = True
        self._events.put_nowait(ShutdownRequested(signal_name=reason))

    def attach(self, services: Sequence[TrackedService], *, side_tasks: Iterable[asyncio.Task] = ()) -> None:
        """
        Take ownership of the launched services and start watching for exits.

        ``side_tasks`` (such as readiness polling) are cancelled once shutdown begins.
        """
        if self._services:
            raise RuntimeError("Services are already attached to this supervisor")
        self._services = tuple(services)
        self._side_tasks = list(side_tasks)
        self._watchers = [
            asyncio.create_task(self._watch_exit(service), name=f"watch-{service.name}") for service in self._services
        ]
        self._state = SupervisorState.RUNNING

    async def _watch_exit(self, service: TrackedService) -> None:
        returncode = await service.wait()
        self._events.put_nowait(ServiceExited(service_name=service.name, returncode=returncode))

    async def run(self) -> int:
        """Block until the first trigger, shut down, and return the final exit code."""
        trigger = await self._events.get()
        outcome = await self.trigger_shutdown(trigger)
        return outcome.exit_code

    async def trigger_shutdown(self, trigger: SupervisorEvent) -> ShutdownOutcome:
        """
        Run the shutdown sequence for *trigger* unless one has already started.

        Later callers wait for and receive the outcome of the first trigger.
        """
        if self._shutdown_state is not ShutdownState.NOT_STARTED:
            logger.debug("Shutdown already %s; ignoring trigger (%s)", self._shutdown_state.value, trigger.describe())
            return await asyncio.shield(self._shutdown_done)

        self._shutdown_state = ShutdownState.IN_PROGRESS
        self._shutdown_done = asyncio.get_running_loop().create_future()
        self._state = SupervisorState.SHUTTING_DOWN
        try:
            outcome = await self._shutdown(trigger)
        except asyncio.CancelledError:
            self._shutdown_done.cancel()
            raise
        except Exception as exc:
            self._shutdown_done.set_exception(exc)
            # The first caller re-raises; later callers read it through the future.
            self._shutdown_done.exception()
            raise
        finally:
            self._shutdown_state = ShutdownState.COMPLETE
            self._state = SupervisorState.STOPPED
        self._shutdown_done.set_result(outcome)
        return outcome

    async def _shutdown(self, trigger: SupervisorEvent) -> ShutdownOutcome:
        self.shutdown_runs += 1
        if isinstance(trigger, ServiceExited):
            logger.warning("A service process exited: %s, initiating shutdown...", trigger.describe())
        else:
            logger.info("Received shutdown signal (%s) - shutting down gracefully...", trigger.signal_name)

        for task in self._side_tasks:
            task.cancel()

        survivors = await run_shutdown_sequence(
            self._services,
            timeout_seconds=self._settings.drain_timeout_seconds,
            interval_seconds=self._settings.drain_interval_seconds,
            force_kill_on_timeout=self._settings.force_kill_on_timeout,
        )
        for watcher in self._watchers:
            if not watcher.done():
                watcher.cancel()
        return ShutdownOutcome(trigger=trigger, stopped_cleanly=not survivors, survivors=survivors)


__all__ = ["LifecycleSupervisor"]
