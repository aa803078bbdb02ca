"""
Tests for the package logger.
"""

import importlib
import logging

import pytest
from rich.logging import RichHandler

from ipswdownloads import log_utils
from ipswdownloads.log_utils import logger, set_log_level

pytestmark = pytest.mark.unit


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.NOTSET)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture(autouse=True)
def _restore_logger():
    level = logger.level
    yield
    set_log_level(logging.getLevelName(level))


@pytest.fixture
def captured():
    handler = _ListHandler()
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


def test_logger_uses_single_rich_console_handler():
    assert logger.name == "ipswdownloads"
    assert logger.propagate is False
    assert [type(h) for h in logger.handlers] == [RichHandler]


def test_set_log_level_updates_logger_and_handlers():
    assert set_log_level("debug") is True

    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_unknown_level_is_ignored_with_warning(captured):
    set_log_level("INFO")

    assert set_log_level("chatty") is False

    assert logger.level == logging.INFO
    assert any(
        r.levelno == logging.WARNING and "chatty" in r.getMessage() for r in captured
    )


def test_debug_messages_filtered_at_info(captured):
    set_log_level("INFO")

    logger.debug("mapped a device")
    logger.info("opened client")

    assert [r.getMessage() for r in captured] == ["opened client"]


@pytest.mark.parametrize(
    "env_value, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("LOUD", logging.INFO)],
)
def test_initial_level_from_environment(monkeypatch, env_value, expected):
    monkeypatch.setenv("IPSWDOWNLOADS_LOG_LEVEL", env_value)

    importlib.reload(log_utils)

    assert log_utils.logger.level == expected
    assert len(log_utils.logger.handlers) == 1
