from __future__ import annotations

import signal
from unittest.mock import MagicMock

from src.wallos_supervisor.lifecycle_supervisor_helpers import (
    IGNORED_SIGNALS,
    TERMINATION_SIGNALS,
    ServiceExited,
    ShutdownOutcome,
    ShutdownRequested,
    install_signal_handlers,
    remove_signal_handlers,
)


def test_termination_signals_route_to_callback():
    loop = MagicMock()
    callback = MagicMock()

    installed = install_signal_handlers(loop, callback)

    registered = {call.args[0]: call.args[1:] for call in loop.add_signal_handler.call_args_list}
    assert set(TERMINATION_SIGNALS) == {signal.SIGTERM, signal.SIGINT, signal.SIGQUIT}
    for signum in TERMINATION_SIGNALS:
        assert registered[signum] == (callback, signum)
    assert set(installed) == set(TERMINATION_SIGNALS) | set(IGNORED_SIGNALS)


def test_sighup_registered_as_noop():
    loop = MagicMock()
    callback = MagicMock()

    install_signal_handlers(loop, callback)

    registered = {call.args[0]: call.args[1:] for call in loop.add_signal_handler.call_args_list}
    handler, signum = registered[signal.SIGHUP]
    assert handler is not callback
    handler(signum)
    callback.assert_not_called()


def test_remove_signal_handlers():
    loop = MagicMock()

    remove_signal_handlers(loop, [signal.SIGTERM, signal.SIGHUP])

    assert [call.args[0] for call in loop.remove_signal_handler.call_args_list] == [signal.SIGTERM, signal.SIGHUP]


def test_exit_codes_follow_trigger():
    crash = ShutdownOutcome(trigger=ServiceExited("PHP-FPM", 1), stopped_cleanly=True)
    killed = ShutdownOutcome(trigger=ServiceExited("Nginx", -signal.SIGKILL), stopped_cleanly=True)
    requested = ShutdownOutcome(trigger=ShutdownRequested("SIGTERM"), stopped_cleanly=False, survivors=("Nginx",))

    assert crash.exit_code == 1
    assert killed.exit_code == 128 + signal.SIGKILL
    assert requested.exit_code == 0
