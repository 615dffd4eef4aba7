"""HTTP readiness probe."""

import asyncio
import logging

import aiohttp
from aiohttp import ClientError, ClientTimeout

from .types import HTTP_OK, HealthCheckResult

logger = logging.getLogger(__name__)


class HttpProbe:
    """Issues one GET against a readiness URL per call."""

    def __init__(self, url: str, timeout_seconds: float = 5.0):
        """
        Initialize HTTP probe.

        Args:
            url: Readiness endpoint to query
            timeout_seconds: Total timeout for one request
        """
        self.url = url
        self.timeout_seconds = timeout_seconds

    async def check(self) -> HealthCheckResult:
        """
        Probe the readiness endpoint once.

        Returns:
            HealthCheckResult that is healthy only for HTTP 200
        """
        try:
            async with aiohttp.ClientSession() as session:
                timeout = ClientTimeout(total=self.timeout_seconds)
                async with session.get(self.url, timeout=timeout) as response:
                    return HealthCheckResult(healthy=response.status == HTTP_OK, status_code=response.status)
        except asyncio.TimeoutError:  # policy_guard: allow-silent-handler
            logger.debug("Readiness probe to %s timed out", self.url)
            return HealthCheckResult(healthy=False, error_message="HTTP timeout")
        except (ClientError, OSError, ValueError) as exc:  # policy_guard: allow-silent-handler
            logger.debug("Readiness probe to %s failed: %s", self.url, exc)
            return HealthCheckResult(healthy=False, error_message="HTTP error")
