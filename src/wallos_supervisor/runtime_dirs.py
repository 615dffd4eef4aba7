"""Prepare writable runtime directories for a read-only root filesystem.

All mutable state lives under externally mounted writable roots. Every step
here is best-effort: a directory or permission change that fails is logged at
debug level and startup continues.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List

from .settings import SupervisorSettings

logger = logging.getLogger(__name__)

SETGID_DIR_MODE = 0o2775


def runtime_directories(settings: SupervisorSettings) -> List[Path]:
    ephemeral = settings.ephemeral_root
    return [
        ephemeral / "run" / "nginx",
        ephemeral / "run" / "php-fpm",
        ephemeral / "tmp" / "client_body",
        ephemeral / "tmp" / "proxy",
        ephemeral / "tmp" / "fastcgi",
        ephemeral / "tmp" / "uwsgi",
        ephemeral / "tmp" / "scgi",
        settings.log_root / "nginx",
        settings.log_root / "cron",
        settings.tmp_root / "nginx",
    ]


def runtime_log_files(settings: SupervisorSettings) -> List[Path]:
    return [
        settings.log_root / "nginx" / "error.log",
        settings.log_root / "nginx" / "access.log",
        settings.log_root / "php-fpm.log",
    ]


def _ensure_directories(paths: Iterable[Path]) -> None:
    for path in paths:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # policy_guard: allow-silent-handler
            logger.debug("Could not create %s: %s", path, exc)


def _touch_files(paths: Iterable[Path]) -> None:
    for path in paths:
        try:
            path.touch(exist_ok=True)
        except OSError as exc:  # policy_guard: allow-silent-handler
            logger.debug("Could not create %s: %s", path, exc)


def _add_group_access(path: Path) -> None:
    """Equivalent of ``chmod g+rwX`` for a single path."""
    try:
        mode = path.lstat().st_mode
        if stat.S_ISLNK(mode):
            return
        new_mode = stat.S_IMODE(mode) | stat.S_IRGRP | stat.S_IWGRP
        if stat.S_ISDIR(mode) or mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
            new_mode |= stat.S_IXGRP
        if new_mode != stat.S_IMODE(mode):
            os.chmod(path, new_mode)
    except OSError as exc:  # policy_guard: allow-silent-handler
        logger.debug("Could not relax permissions on %s: %s", path, exc)


def _walk(root: Path, *, directories_only: bool = False):
    if not root.is_dir():
        return
    yield root
    for current, dirnames, filenames in os.walk(root):
        base = Path(current)
        for name in dirnames:
            yield base / name
        if not directories_only:
            for name in filenames:
                yield base / name


def grant_group_write(roots: Iterable[Path]) -> None:
    """Make everything under *roots* group read/writable."""
    for root in roots:
        for path in _walk(root):
            _add_group_access(path)


def set_setgid_directories(roots: Iterable[Path]) -> None:
    """Give every directory under *roots* mode 2775 so new files keep the group."""
    for root in roots:
        for path in _walk(root, directories_only=True):
            if path.is_symlink():
                continue
            try:
                os.chmod(path, SETGID_DIR_MODE)
            except OSError as exc:  # policy_guard: allow-silent-handler
                logger.debug("Could not set mode %o on %s: %s", SETGID_DIR_MODE, path, exc)


def prepare_runtime_dirs(settings: SupervisorSettings) -> None:
    """Create runtime directories and log files, then relax their permissions."""
    logger.info("Preparing runtime writable directories for readonly rootfs...")

    _ensure_directories(runtime_directories(settings))
    _touch_files(runtime_log_files(settings))
    grant_group_write([settings.ephemeral_root, settings.log_root, settings.tmp_root])
    set_setgid_directories([settings.ephemeral_root, settings.log_root])

    logger.info("Runtime directories prepared")


__all__ = [
    "grant_group_write",
    "prepare_runtime_dirs",
    "runtime_directories",
    "runtime_log_files",
    "set_setgid_directories",
]
