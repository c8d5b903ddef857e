"""
Tests for the logging setup.
"""

import logging
from pathlib import Path

from rollbar_wizard.core.observability.logging_config import (
    _parse_level,
    resolve_level,
    setup_logging,
)


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True, environ={"RBW_LOG_LEVEL": "DEBUG"}) == "ERROR"

    def test_environment_then_default(self):
        assert resolve_level(environ={"RBW_LOG_LEVEL": "INFO"}) == "INFO"
        assert resolve_level(environ={"RBW_LOG_LEVEL": ""}) == "WARNING"
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_only(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_warning_lines_are_prefixed(self):
        setup_logging(level="WARNING")
        handler = logging.getLogger().handlers[0]
        record = logging.LogRecord("rollbar_wizard.x", logging.WARNING, __file__, 1, "careful", None, None)
        assert handler.format(record) == "rollbar-wizard: WARNING: careful"

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "wizard.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        try:
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 2
            assert root.handlers[0].level == logging.WARNING
            logging.getLogger("rollbar_wizard.test").debug("hello file")
            for handler in root.handlers:
                handler.flush()
            assert "hello file" in log_file.read_text()
        finally:
            for handler in root.handlers[1:]:
                handler.close()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(level="DEBUG")
        setup_logging(level="ERROR")
        assert len(logging.getLogger().handlers) == 1


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallbacks(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("LOUD") == logging.WARNING
