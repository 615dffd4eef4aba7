from __future__ import annotations

import logging
import signal

import pytest

from src.wallos_supervisor.lifecycle_supervisor_helpers import run_shutdown_sequence
from src.wallos_supervisor.lifecycle_supervisor_helpers.shutdown_sequence import drain, send_stop_signals


class FakeService:
    """Stands in for TrackedService; dies after a number of liveness polls once signalled."""

    def __init__(self, name, stop_signal, *, polls_to_die=0, alive=True, log=None):
        self.name = name
        self.pid = hash(name) & 0xFFFF
        self.stop_signal = stop_signal
        self.polls_to_die = polls_to_die
        self.alive = alive
        self.signalled = []
        self.log = log if log is not None else []

    def is_alive(self):
        if self.alive and self.signalled:
            if self.polls_to_die <= 0:
                self.alive = False
            else:
                self.polls_to_die -= 1
        return self.alive

    def send_stop_signal(self):
        return self.send_signal(self.stop_signal)

    def send_signal(self, signum):
        self.signalled.append(signum)
        self.log.append(("signal", self.name))
        if signum is signal.SIGKILL:
            self.alive = False
            self.polls_to_die = 0
        return True


def test_each_live_service_gets_its_own_signal():
    nginx = FakeService("Nginx", signal.SIGQUIT)
    fpm = FakeService("PHP-FPM", signal.SIGQUIT)
    cron = FakeService("Supercronic", signal.SIGTERM)
    dead = FakeService("Gone", signal.SIGTERM, alive=False)

    send_stop_signals([nginx, fpm, cron, dead])

    assert nginx.signalled == [signal.SIGQUIT]
    assert fpm.signalled == [signal.SIGQUIT]
    assert cron.signalled == [signal.SIGTERM]
    assert dead.signalled == []


@pytest.mark.asyncio
async def test_all_signals_sent_before_draining(caplog):
    log = []
    services = [FakeService(name, signal.SIGTERM, polls_to_die=2, log=log) for name in ("a", "b", "c")]

    with caplog.at_level(logging.INFO):
        survivors = await run_shutdown_sequence(services, timeout_seconds=1.0, interval_seconds=0.01)

    assert survivors == ()
    assert log == [("signal", "a"), ("signal", "b"), ("signal", "c")]
    assert "All services stopped gracefully" in caplog.text


@pytest.mark.asyncio
async def test_deadline_reports_survivors_without_killing(caplog):
    stuck = FakeService("Nginx", signal.SIGQUIT, polls_to_die=10_000)
    quick = FakeService("PHP-FPM", signal.SIGQUIT)

    with caplog.at_level(logging.WARNING):
        survivors = await run_shutdown_sequence([stuck, quick], timeout_seconds=0.1, interval_seconds=0.02)

    assert survivors == ("Nginx",)
    assert stuck.signalled == [signal.SIGQUIT]
    assert "did not stop within" in caplog.text


@pytest.mark.asyncio
async def test_force_kill_escalation_when_enabled():
    stuck = FakeService("Nginx", signal.SIGQUIT, polls_to_die=10_000)

    survivors = await run_shutdown_sequence([stuck], timeout_seconds=0.05, interval_seconds=0.01, force_kill_on_timeout=True)

    assert survivors == ("Nginx",)
    assert stuck.signalled == [signal.SIGQUIT, signal.SIGKILL]
    assert not stuck.alive


@pytest.mark.asyncio
async def test_drain_returns_immediately_when_nothing_alive():
    services = [FakeService("a", signal.SIGTERM, alive=False)]

    assert await drain(services, timeout_seconds=0, interval_seconds=1) == ()
