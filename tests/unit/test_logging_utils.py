#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Unit tests for the CLI logging setup."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from orghugo.exceptions import OutputWriteError
from orghugo.logging_utils import configure_logging, resolve_log_level


def _installed(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if getattr(h, "_orghugo_handler", False)]


@pytest.mark.unit
class TestResolveLogLevel:
    """Tests for level name handling."""

    @pytest.mark.parametrize("value,expected", [(logging.ERROR, logging.ERROR), ("debug", logging.DEBUG), ("INFO", 20)])
    def test_known_levels(self, value, expected: int) -> None:
        """Test numbers pass through and names are case-insensitive."""
        assert resolve_log_level(value) == expected

    def test_unknown_name(self) -> None:
        """Test an unknown name falls back to INFO."""
        assert resolve_log_level("chatty") == logging.INFO


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_plain_console_handler(self) -> None:
        """Test one stderr handler with the short format is installed."""
        root = configure_logging("WARNING")

        handlers = _installed(root)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert not isinstance(handlers[0], RichHandler)
        assert handlers[0].formatter._fmt == "%(levelname)s: %(message)s"
        assert root.level == logging.WARNING

    def test_rich_console_handler(self) -> None:
        """Test use_rich switches the console handler to RichHandler."""
        root = configure_logging(logging.INFO, use_rich=True)

        handlers = _installed(root)
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert handlers[0].level == logging.INFO

    def test_trace_format(self) -> None:
        """Test trace mode adds timestamps and logger names."""
        root = configure_logging(logging.DEBUG, trace_mode=True)

        assert "%(name)s" in _installed(root)[0].formatter._fmt

    def test_repeated_calls_replace_own_handlers(self) -> None:
        """Test a second call does not stack console handlers."""
        configure_logging("INFO")
        root = configure_logging("DEBUG", use_rich=True)

        handlers = _installed(root)
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert root.level == logging.DEBUG

    def test_foreign_handlers_kept(self) -> None:
        """Test handlers installed by someone else survive."""
        foreign = logging.NullHandler()
        logging.getLogger().addHandler(foreign)

        try:
            root = configure_logging("INFO")

            assert foreign in root.handlers
        finally:
            logging.getLogger().removeHandler(foreign)

    def test_log_file(self, tmp_path: Path) -> None:
        """Test records are appended to the log file."""
        log_path = tmp_path / "run.log"
        configure_logging("INFO", log_file=str(log_path))

        logging.getLogger("orghugo.test").info("written to file")
        for handler in _installed(logging.getLogger()):
            handler.flush()

        assert "written to file" in log_path.read_text(encoding="utf-8")

    def test_unopenable_log_file(self, tmp_path: Path) -> None:
        """Test a log file that cannot be opened raises OutputWriteError and installs nothing."""
        log_path = tmp_path / "missing" / "run.log"

        with pytest.raises(OutputWriteError) as exc_info:
            configure_logging("INFO", log_file=str(log_path))

        assert exc_info.value.file_path == str(log_path)
        assert isinstance(exc_info.value.original_error, OSError)
        assert _installed(logging.getLogger()) == []
