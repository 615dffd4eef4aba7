"""
Centralized logging configuration for the supervisor.

Container logs are read from the process output streams, so the console
handler writes to stderr. A file copy is added when ``SUPERVISOR_LOG_FILE``
points somewhere writable.
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional

from .config import env_str

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or env_str("SUPERVISOR_LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as exc:  # Best-effort cleanup operation
            _MODULE_LOGGER.debug("Handler close failed: %s", exc)
        logger.removeHandler(handler)


def _build_console_handler() -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return console_handler


def _build_file_handler(log_file: Optional[str]) -> Optional[logging.Handler]:
    target = log_file or env_str("SUPERVISOR_LOG_FILE")
    if not target:
        return None

    log_path = Path(target).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.WatchedFileHandler(log_path, mode="a")
    except OSError as exc:  # Read-only filesystem; console output still works
        _MODULE_LOGGER.warning("Cannot open log file %s: %s", log_path, exc)
        return None
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger for the supervisor process."""

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler())
        file_handler = _build_file_handler(log_file)
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(_resolve_level(level))
        _suppress_noisy_third_parties()


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "setup_logging"]
