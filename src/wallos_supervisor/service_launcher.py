"""Start the tracked services and confirm they survived startup."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from .errors import LaunchError
from .service_launcher_helpers import LIVENESS_CHECK_ORDER, ServiceSpec, TrackedService, build_service_specs
from .settings import SupervisorSettings

logger = logging.getLogger(__name__)


class ServiceLauncher:
    """Launches every service as an independent child and records its identity."""

    def __init__(self, settings: SupervisorSettings, specs: Optional[Sequence[ServiceSpec]] = None) -> None:
        self._settings = settings
        self._specs = tuple(specs) if specs is not None else build_service_specs(settings)

    async def launch_all(self) -> List[TrackedService]:
        """
        Start all services, wait the launch grace period and re-check liveness.

        Returns:
            Tracked services in launch order

        Raises:
            LaunchError: If a service cannot be spawned or is dead after the grace period.
                Services that did start are left alone; none were confirmed healthy.
        """
        logger.info("Starting services...")
        services: List[TrackedService] = []
        for spec in self._specs:
            services.append(await self._launch(spec))

        logger.info("Verifying service health...")
        await asyncio.sleep(self._settings.launch_grace_seconds)
        for service in _in_check_order(services):
            if not service.is_alive():
                raise LaunchError.not_running(service.name)
        return services

    async def _launch(self, spec: ServiceSpec) -> TrackedService:
        logger.info("Starting %s...", spec.name)
        try:
            process = await asyncio.create_subprocess_exec(*spec.command)
        except OSError as exc:
            raise LaunchError.spawn_failed(spec.name) from exc
        logger.debug("%s started with PID %s", spec.name, process.pid)
        return TrackedService(name=spec.name, command=spec.command, stop_signal=spec.stop_signal, process=process)


def _in_check_order(services: Sequence[TrackedService]) -> List[TrackedService]:
    def rank(service: TrackedService) -> int:
        if service.name in LIVENESS_CHECK_ORDER:
            return LIVENESS_CHECK_ORDER.index(service.name)
        return len(LIVENESS_CHECK_ORDER)

    return sorted(services, key=rank)


__all__ = ["ServiceLauncher"]
