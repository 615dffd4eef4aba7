"""Advisory readiness polling for the web server.

Liveness has already been confirmed by the launcher, so an endpoint that never
answers 200 only produces a warning.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from .health_monitor_helpers import HealthCheckResult, HttpProbe
from .settings import SupervisorSettings

logger = logging.getLogger(__name__)


class ReadinessProbe(Protocol):
    async def check(self) -> HealthCheckResult: ...


class HealthMonitor:
    """Polls a readiness probe until it succeeds or the attempt budget runs out."""

    def __init__(self, probe: ReadinessProbe, *, port: int, attempts: int, interval_seconds: float) -> None:
        self._probe = probe
        self._port = port
        self._attempts = max(1, attempts)
        self._interval_seconds = interval_seconds

    @classmethod
    def from_settings(cls, settings: SupervisorSettings) -> "HealthMonitor":
        probe = HttpProbe(settings.health_url, timeout_seconds=settings.health_timeout_seconds)
        return cls(
            probe,
            port=settings.port,
            attempts=settings.health_attempts,
            interval_seconds=settings.health_interval_seconds,
        )

    async def wait_until_ready(self) -> bool:
        """Return ``True`` once the probe reports ready, ``False`` after the last failed attempt."""
        result: Optional[HealthCheckResult] = None
        for attempt in range(1, self._attempts + 1):
            result = await self._probe.check()
            if result.healthy:
                logger.info("All services started successfully")
                logger.info("Wallos is ready to accept connections on port %s", self._port)
                return True
            logger.debug("Readiness attempt %s/%s: %s", attempt, self._attempts, result.describe())
            if attempt < self._attempts:
                await asyncio.sleep(self._interval_seconds)

        logger.warning("Nginx health check failed (%s), but process is running", result.describe())
        return False


__all__ = ["HealthMonitor", "ReadinessProbe"]
