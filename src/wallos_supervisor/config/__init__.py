"""Shared configuration helpers."""

from .errors import ConfigurationError
from .runtime import (
    ENV_FILE_VARIABLE,
    env_bool,
    env_float,
    env_int,
    env_seconds,
    env_str,
    load_dotenv_values,
)

__all__ = [
    "ConfigurationError",
    "ENV_FILE_VARIABLE",
    "env_bool",
    "env_float",
    "env_int",
    "env_seconds",
    "env_str",
    "load_dotenv_values",
]
