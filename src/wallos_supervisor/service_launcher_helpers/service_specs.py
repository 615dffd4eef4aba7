"""Launch commands and stop signals for the tracked services."""

from __future__ import annotations

import signal
from dataclasses import dataclass
from typing import Tuple

from ..settings import SupervisorSettings


@dataclass(frozen=True)
class ServiceSpec:
    """How to start a service and which signal asks it to stop gracefully."""

    name: str
    command: Tuple[str, ...]
    stop_signal: signal.Signals


# Post-launch liveness is confirmed in this order; unlisted services follow in launch order.
LIVENESS_CHECK_ORDER: Tuple[str, ...] = ("PHP-FPM", "Nginx", "Supercronic")


def build_service_specs(settings: SupervisorSettings) -> Tuple[ServiceSpec, ...]:
    """
    Return the three tracked services in launch order.

    nginx and php-fpm both treat ``SIGQUIT`` as a graceful stop; supercronic
    finishes running jobs on ``SIGTERM``. The web server reads its port from
    the inherited ``NGINX_PORT`` environment variable via its config template.
    """
    return (
        ServiceSpec(name="PHP-FPM", command=("php-fpm", "-F"), stop_signal=signal.SIGQUIT),
        ServiceSpec(
            name="Supercronic",
            command=("supercronic", str(settings.crontab_path)),
            stop_signal=signal.SIGTERM,
        ),
        ServiceSpec(name="Nginx", command=("nginx", "-g", "daemon off;"), stop_signal=signal.SIGQUIT),
    )


__all__ = ["LIVENESS_CHECK_ORDER", "ServiceSpec", "build_service_specs"]
