"""Supervisor settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .config import env_bool, env_int, env_seconds, env_str

PORT_VARIABLE = "NGINX_PORT"


@dataclass(frozen=True)
class SupervisorSettings:
    """Every tunable the supervisor reads at startup."""

    port: Optional[int]
    crontab_path: Path = Path("/etc/crontab")
    app_dir: Path = Path("/var/www/html")
    php_binary: str = "/usr/local/bin/php"
    health_path: str = "/health.php"
    ephemeral_root: Path = Path("/var/ephemeral")
    log_root: Path = Path("/var/log")
    tmp_root: Path = Path("/tmp")
    launch_grace_seconds: float = 2.0
    health_attempts: int = 10
    health_interval_seconds: float = 1.0
    health_timeout_seconds: float = 5.0
    drain_timeout_seconds: float = 10.0
    drain_interval_seconds: float = 1.0
    force_kill_on_timeout: bool = False
    required_executables: Tuple[str, ...] = ("php", "php-fpm", "nginx", "supercronic")

    @property
    def endpoints_dir(self) -> Path:
        return self.app_dir / "endpoints"

    @property
    def health_url(self) -> str:
        return f"http://localhost:{self.port}{self.health_path}"

    def script_command(self, relative_script: str) -> Tuple[str, ...]:
        """Command line that runs an application script through the PHP runtime."""
        return (self.php_binary, str(self.app_dir / relative_script))


def load_settings() -> SupervisorSettings:
    """Build settings from the environment.

    The port is read without ``required=True`` so that its absence is reported
    by the environment validator together with the other preconditions.
    """
    defaults = SupervisorSettings(port=None)
    return SupervisorSettings(
        port=env_int(PORT_VARIABLE),
        crontab_path=Path(env_str("WALLOS_CRONTAB_PATH", str(defaults.crontab_path))),
        app_dir=Path(env_str("WALLOS_APP_DIR", str(defaults.app_dir))),
        php_binary=env_str("WALLOS_PHP_BINARY", defaults.php_binary),
        health_path=env_str("WALLOS_HEALTH_PATH", defaults.health_path),
        ephemeral_root=Path(env_str("WALLOS_EPHEMERAL_ROOT", str(defaults.ephemeral_root))),
        log_root=Path(env_str("WALLOS_LOG_ROOT", str(defaults.log_root))),
        tmp_root=Path(env_str("WALLOS_TMP_ROOT", str(defaults.tmp_root))),
        launch_grace_seconds=env_seconds("SUPERVISOR_LAUNCH_GRACE_SECONDS", defaults.launch_grace_seconds),
        health_attempts=env_int("SUPERVISOR_HEALTH_ATTEMPTS", defaults.health_attempts),
        health_interval_seconds=env_seconds("SUPERVISOR_HEALTH_INTERVAL_SECONDS", defaults.health_interval_seconds),
        health_timeout_seconds=env_seconds("SUPERVISOR_HEALTH_TIMEOUT_SECONDS", defaults.health_timeout_seconds),
        drain_timeout_seconds=env_seconds("SUPERVISOR_DRAIN_TIMEOUT_SECONDS", defaults.drain_timeout_seconds),
        drain_interval_seconds=env_seconds("SUPERVISOR_DRAIN_INTERVAL_SECONDS", defaults.drain_interval_seconds),
        force_kill_on_timeout=env_bool("SUPERVISOR_FORCE_KILL_ON_TIMEOUT", defaults.force_kill_on_timeout),
    )


__all__ = ["PORT_VARIABLE", "SupervisorSettings", "load_settings"]
