"""Readiness probe helpers."""

from .http_probe import HttpProbe
from .types import HTTP_OK, HealthCheckResult

__all__ = ["HTTP_OK", "HealthCheckResult", "HttpProbe"]
