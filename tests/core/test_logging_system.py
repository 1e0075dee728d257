"""Tests for the logging setup."""

import logging
from pathlib import Path

import pytest

from meshflight.core import logging_system
from meshflight.core.logging_system import (
    get_log_directory,
    get_logger,
    initialize_logging,
    is_initialized,
)


class TestLoggingSystem:
    """Test logger creation and configuration."""

    def test_get_logger_uses_name(self) -> None:
        logger = get_logger("meshflight.physics.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "meshflight.physics.test"

    def test_initialize_without_config(self) -> None:
        initialize_logging(level=logging.DEBUG)
        assert is_initialized()

    def test_initialize_from_yaml(self, tmp_path: Path) -> None:
        """Test dictConfig loading with file paths moved to the log directory."""
        config = tmp_path / "logging.yaml"
        config.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  file:\n"
            "    class: logging.FileHandler\n"
            f"    filename: {tmp_path / 'test.log'}\n"
            "loggers:\n"
            "  meshflight.test_yaml:\n"
            "    level: WARNING\n"
            "    handlers: [file]\n",
            encoding="utf-8",
        )
        initialize_logging(str(config))
        assert get_logger("meshflight.test_yaml").level == logging.WARNING

    def test_file_handlers_redirected(self, tmp_path: Path) -> None:
        config = {"handlers": {"file": {"filename": "app.log"}, "abs": {"filename": "/var/x.log"}}}
        logging_system._redirect_file_handlers(config, tmp_path / "logs")
        assert config["handlers"]["file"]["filename"] == str(tmp_path / "logs" / "app.log")
        assert config["handlers"]["abs"]["filename"] == "/var/x.log"
        assert (tmp_path / "logs").is_dir()

    def test_log_directory_linux(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(logging_system.platform, "system", lambda: "Linux")
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        assert get_log_directory("meshflight") == tmp_path / "meshflight" / "logs"
