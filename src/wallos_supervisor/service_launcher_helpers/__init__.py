"""Helpers for starting and tracking service processes."""

from .service_specs import LIVENESS_CHECK_ORDER, ServiceSpec, build_service_specs
from .tracked_service import TrackedService, exit_code_from_returncode

__all__ = [
    "LIVENESS_CHECK_ORDER",
    "ServiceSpec",
    "TrackedService",
    "build_service_specs",
    "exit_code_from_returncode",
]
