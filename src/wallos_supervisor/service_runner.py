"""Container entry point: startup pipeline followed by the supervised run."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .background_tasks import BackgroundTaskRunner
from .config import ConfigurationError
from .environment_validator import validate_environment
from .errors import PreconditionError, SupervisorError
from .health_monitor import HealthMonitor
from .initializer import Initializer
from .lifecycle_supervisor import LifecycleSupervisor
from .logging_config import setup_logging
from .runtime_dirs import prepare_runtime_dirs
from .service_launcher import ServiceLauncher
from .settings import SupervisorSettings, load_settings

logger = logging.getLogger(__name__)


async def run_supervisor(
    settings: SupervisorSettings,
    *,
    supervisor: Optional[LifecycleSupervisor] = None,
    launcher: Optional[ServiceLauncher] = None,
) -> int:
    """
    Run the full startup pipeline and supervise until shutdown.

    Returns:
        Final process exit code

    Raises:
        SupervisorError: On precondition, initialization or launch failure
    """
    supervisor = supervisor or LifecycleSupervisor(settings)
    supervisor.install_signal_handlers()
    try:
        validate_environment(settings)
        await Initializer(settings).run()

        if supervisor.shutdown_requested:
            logger.info("Shutdown requested before services were started; exiting")
            return 0

        background = BackgroundTaskRunner(settings)
        background.start()

        prepare_runtime_dirs(settings)

        services = await (launcher or ServiceLauncher(settings)).launch_all()
        health_task = asyncio.create_task(HealthMonitor.from_settings(settings).wait_until_ready(), name="readiness")
        supervisor.attach(services, side_tasks=(health_task,))
        return await supervisor.run()
    finally:
        supervisor.remove_signal_handlers()


def main() -> None:
    """Console entry point; always exits through ``SystemExit``."""
    setup_logging()
    logger.info("Wallos container starting...")

    try:
        settings = load_settings()
        exit_code = asyncio.run(run_supervisor(settings))
    except ConfigurationError as exc:
        logger.error("ERROR: %s", exc)
        raise SystemExit(PreconditionError.exit_code) from exc
    except SupervisorError as exc:
        logger.error("ERROR: %s", exc)
        raise SystemExit(exc.exit_code) from exc

    logger.info("Supervisor exiting with code %s", exit_code)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()


__all__ = ["main", "run_supervisor"]
