"""Tests for om_common.logging_config."""
import logging
from pathlib import Path

from src.om_common.logging_config import build_dict_config, configure_logging


class TestBuildDictConfig:
    def test_console_only_by_default(self) -> None:
        cfg = build_dict_config("INFO")
        assert cfg["root"]["handlers"] == ["console"]
        assert cfg["root"]["level"] == "INFO"
        assert "file" not in cfg["handlers"]

    def test_rotating_file_handler(self) -> None:
        cfg = build_dict_config("DEBUG", "logs/app.log")
        assert cfg["root"]["handlers"] == ["console", "file"]
        assert cfg["handlers"]["file"]["class"] == "logging.handlers.RotatingFileHandler"
        assert cfg["handlers"]["file"]["filename"] == "logs/app.log"

    def test_http_client_loggers_quietened(self) -> None:
        loggers = build_dict_config("DEBUG")["loggers"]
        assert loggers["httpx"]["level"] == "WARNING"
        assert loggers["httpcore"]["level"] == "WARNING"


class TestConfigureLogging:
    def test_creates_log_directory(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "om.log"
        configure_logging("WARNING", str(log_file))
        try:
            assert log_file.parent.is_dir()
            assert logging.getLogger().level == logging.WARNING
        finally:
            for handler in logging.getLogger().handlers:
                handler.close()
            configure_logging("INFO")
