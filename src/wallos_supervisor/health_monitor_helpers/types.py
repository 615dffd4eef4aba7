"""Type definitions for readiness probing."""

from dataclasses import dataclass
from typing import Optional

HTTP_OK = 200


@dataclass(frozen=True)
class HealthCheckResult:
    """Outcome of a single readiness probe attempt."""

    healthy: bool
    status_code: Optional[int] = None
    error_message: Optional[str] = None

    def describe(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}"
        return self.error_message or "no response"
