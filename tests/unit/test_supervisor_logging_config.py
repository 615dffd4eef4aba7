from __future__ import annotations

import logging
import logging.handlers

import pytest

from src.wallos_supervisor import logging_config


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_console_handler_writes_to_stderr(clean_root, monkeypatch):
    monkeypatch.delenv("SUPERVISOR_LOG_FILE", raising=False)

    logging_config.setup_logging(level="debug")

    assert len(clean_root.handlers) == 1
    handler = clean_root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is logging_config.sys.stderr
    assert clean_root.level == logging.DEBUG


def test_repeat_setup_replaces_handlers(clean_root, monkeypatch):
    monkeypatch.delenv("SUPERVISOR_LOG_FILE", raising=False)

    logging_config.setup_logging()
    logging_config.setup_logging()

    assert len(clean_root.handlers) == 1


def test_file_handler_added_when_configured(clean_root, tmp_path):
    log_file = tmp_path / "logs" / "supervisor.log"

    logging_config.setup_logging(log_file=str(log_file))
    logging.getLogger("wallos.test").warning("hello file")
    for handler in clean_root.handlers:
        handler.flush()

    assert any(isinstance(handler, logging.handlers.WatchedFileHandler) for handler in clean_root.handlers)
    assert "hello file" in log_file.read_text()


def test_unknown_level_falls_back_to_info(clean_root, monkeypatch):
    monkeypatch.setenv("SUPERVISOR_LOG_LEVEL", "chatty")

    logging_config.setup_logging()

    assert clean_root.level == logging.INFO


def test_third_party_loggers_quieted(clean_root):
    logging_config.setup_logging()

    assert logging.getLogger("aiohttp").level == logging.WARNING
    assert logging.getLogger("asyncio").level == logging.WARNING
