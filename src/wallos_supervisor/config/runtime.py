from __future__ import annotations

"""Environment-backed configuration lookups.

Values come from the process environment first. A ``.env`` file (path taken
from ``SUPERVISOR_ENV_FILE``, defaulting to ``./.env``) supplies fallbacks for
anything the environment leaves unset, which keeps local runs outside the
container convenient.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}

ENV_FILE_VARIABLE = "SUPERVISOR_ENV_FILE"


def _env_file_path() -> Path:
    return Path(os.getenv(ENV_FILE_VARIABLE, ".env")).expanduser()


def load_dotenv_values(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines from *path*; a missing file yields ``{}``."""
    if not path.exists():
        return {}

    values: Dict[str, str] = {}
    try:
        lines = path.read_text().splitlines()
    except OSError as exc:
        raise ConfigurationError.load_failed(f"configuration from {path}") from exc

    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :]
        key, raw_value = stripped.split("=", 1)
        key = key.strip()
        if key:
            values[key] = raw_value.strip().strip("'").strip('"')
    return values


def _lookup(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is not None and value.strip() != "":
        return value.strip()
    fallback = load_dotenv_values(_env_file_path()).get(name)
    if fallback is None or fallback.strip() == "":
        return None
    return fallback.strip()


def env_str(name: str, or_value: str | None = None, *, required: bool = False) -> str | None:
    """Fetch an environment variable as a stripped, non-empty string."""

    value = _lookup(name)
    if value is None:
        if required:
            raise ConfigurationError.missing_value(name, "required environment variable")
        return or_value
    return value


def env_int(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    """Fetch an environment variable and coerce it to ``int``."""

    raw = env_str(name, required=required and or_value is None)
    if raw is None:
        return or_value
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid_format(name, raw, "an integer") from exc


def env_float(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    """Fetch an environment variable and coerce it to ``float``."""

    raw = env_str(name, required=required and or_value is None)
    if raw is None:
        return or_value
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid_format(name, raw, "a float") from exc


def env_seconds(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    """Fetch a non-negative duration expressed in seconds."""

    value = env_float(name, or_value=or_value, required=required)
    if value is None:
        return None
    if value < 0:
        raise ConfigurationError.invalid_value(name, value, "Must be non-negative")
    return value


def env_bool(name: str, or_value: bool | None = None, *, required: bool = False) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name, required=required and or_value is None)
    if raw is None:
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError.invalid_format(name, raw, "a boolean")


__all__ = [
    "ENV_FILE_VARIABLE",
    "env_bool",
    "env_float",
    "env_int",
    "env_seconds",
    "env_str",
    "load_dotenv_values",
]
