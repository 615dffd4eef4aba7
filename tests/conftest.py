"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import psutil
import pytest

from src.wallos_supervisor.settings import SupervisorSettings

# Keep developer shells from leaking into configuration tests
for _name in ("NGINX_PORT", "SUPERVISOR_ENV_FILE", "SUPERVISOR_LOG_FILE", "SUPERVISOR_LOG_LEVEL"):
    os.environ.pop(_name, None)


@pytest.fixture
def make_settings(tmp_path: Path):
    """Factory for settings rooted in ``tmp_path`` with fast timings."""

    def _make(**overrides) -> SupervisorSettings:
        app_dir = tmp_path / "app"
        (app_dir / "endpoints").mkdir(parents=True, exist_ok=True)
        crontab = tmp_path / "crontab"
        crontab.touch()
        base = SupervisorSettings(
            port=8080,
            crontab_path=crontab,
            app_dir=app_dir,
            php_binary="php",
            ephemeral_root=tmp_path / "ephemeral",
            log_root=tmp_path / "log",
            tmp_root=tmp_path / "tmp",
            launch_grace_seconds=0.3,
            health_attempts=3,
            health_interval_seconds=0.01,
            health_timeout_seconds=0.5,
            drain_timeout_seconds=5.0,
            drain_interval_seconds=0.05,
        )
        return replace(base, **overrides)

    return _make


@pytest.fixture
def empty_dotenv(tmp_path: Path, monkeypatch):
    """Point the ``.env`` fallback at a file that does not exist."""
    monkeypatch.setenv("SUPERVISOR_ENV_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def reap_children():
    """Kill any child process a test leaves behind."""
    yield
    for child in psutil.Process().children(recursive=True):
        try:
            child.kill()
            child.wait(timeout=5)
        except psutil.NoSuchProcess:
            pass
