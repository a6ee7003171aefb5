"""
Unit tests for logging setup.
"""

import logging
import logging.handlers

import pytest

from xtreamtv.utils.logging_setup import parse_size, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test runner configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestParseSize:
    """Tests for parse_size."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10MB", 10 * 1024 * 1024),
            ("512kb", 512 * 1024),
            ("1.5GB", int(1.5 * 1024 ** 3)),
            ("2048", 2048),
        ],
    )
    def test_parses(self, value, expected):
        """Test parsing size strings."""
        assert parse_size(value) == expected

    def test_invalid_falls_back_to_default(self):
        """Test invalid sizes use the default."""
        assert parse_size("lots", default=7) == 7
        assert parse_size("xMB", default=7) == 7


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_and_rotating_file(self, tmp_path, restore_root_logger):
        """Test console and rotating file handlers are installed."""
        root = setup_logging(
            log_level="DEBUG",
            log_file_name="app.log",
            max_bytes=1024,
            backup_count=2,
            log_directory=tmp_path,
        )

        assert root.level == logging.DEBUG
        file_handlers = [
            h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert file_handlers[0].backupCount == 2
        assert (tmp_path / "app.log").exists()

    def test_file_path_sets_directory(self, tmp_path, restore_root_logger):
        """Test a file path selects the log directory."""
        log_path = tmp_path / "nested" / "xtreamtv.log"

        setup_logging(log_file_name=str(log_path), log_to_console=False)

        assert log_path.exists()

    def test_console_only(self, restore_root_logger):
        """Test console-only logging."""
        root = setup_logging(log_to_file=False)

        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)

    def test_quiets_http_loggers(self, tmp_path, restore_root_logger):
        """Test third-party loggers are quieted."""
        setup_logging(log_level="DEBUG", log_directory=tmp_path)

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
