"""Unit tests for logging_config module."""

import logging

import pytest
from colorlog import ColoredFormatter

from eventcal.logging_config import EVENTCAL_MODULES, configure_logging, get_logging_status

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_logger_levels():
    """Put root and eventcal logger levels back after each test."""
    names = [None] + EVENTCAL_MODULES
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_defaults_to_info(self):
        assert configure_logging() == logging.INFO
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("eventcal.occurrence_projector").level == logging.INFO

    def test_level_name_from_config(self):
        assert configure_logging("warning") == logging.WARNING
        assert logging.getLogger("eventcal").level == logging.WARNING

    def test_unknown_level_name_falls_back_to_info(self):
        assert configure_logging("chatty") == logging.INFO

    def test_debug_mode(self):
        assert configure_logging("ERROR", debug_mode=True) == logging.DEBUG
        assert logging.getLogger("eventcal.calendar_window").level == logging.DEBUG

    @pytest.mark.parametrize("value", ["1", "true", "YES"])
    def test_debug_from_environment(self, monkeypatch, value):
        monkeypatch.setenv("EVENTCAL_DEBUG", value)

        assert configure_logging("ERROR") == logging.DEBUG

    def test_force_debug_beats_environment(self, monkeypatch):
        monkeypatch.setenv("EVENTCAL_DEBUG", "1")

        assert configure_logging("ERROR", force_debug=False) == logging.ERROR

    def test_log_level_environment_beats_config(self, monkeypatch):
        monkeypatch.setenv("EVENTCAL_LOG_LEVEL", "error")

        assert configure_logging("DEBUG") == logging.ERROR

    def test_adds_colored_handler_when_none(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])

        configure_logging()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)

    def test_keeps_existing_handlers(self, monkeypatch):
        root = logging.getLogger()
        existing = logging.NullHandler()
        monkeypatch.setattr(root, "handlers", [existing])

        configure_logging()

        assert root.handlers == [existing]


class TestLoggingStatus:
    """Tests for get_logging_status."""

    def test_reports_root_and_modules(self):
        configure_logging("WARNING")

        status = get_logging_status()

        assert status["root"] == "WARNING"
        assert set(EVENTCAL_MODULES) <= set(status)
        assert status["eventcal.event_placer"] == "WARNING"
