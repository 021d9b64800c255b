"""Unit tests for enrichment logger setup."""

import json
import logging
import sys
from pathlib import Path
from types import ModuleType

import pytest
import structlog

from src.enrichment import cache, credentials, scanner, watcher
from src.enrichment.omdb import client as omdb_client
from src.enrichment.utils import logger as logger_module
from src.enrichment.utils.logger import (
    _LOGGERS_CACHE,
    _create_console_handler,
    _create_file_handler,
    _get_log_file_path,
    build_formatter,
    reset_loggers,
    setup_logger,
)
from src.settings import settings


class TestSetupLogger:
    @staticmethod
    def test_returns_named_logger(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.named", log_dir=tmp_path)
        assert isinstance(logger, logging.Logger)
        assert logger.name == "enrichment.test.named"

    @staticmethod
    def test_console_and_file_handlers(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.handlers", log_dir=tmp_path)
        kinds = {type(handler) for handler in logger.handlers}
        assert logging.StreamHandler in kinds
        assert logging.FileHandler in kinds

    @staticmethod
    def test_explicit_level(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.debug", level=logging.DEBUG, log_dir=tmp_path)
        assert logger.level == logging.DEBUG

    @staticmethod
    def test_level_from_settings(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.default_level", log_dir=tmp_path)
        assert logger.level == settings.logging.level_number

    @staticmethod
    def test_cache_returns_same_instance(tmp_path: Path) -> None:
        logger1 = setup_logger("enrichment.test.cached", log_dir=tmp_path)
        logger2 = setup_logger("enrichment.test.cached", log_dir=tmp_path)
        assert logger1 is logger2
        assert "enrichment.test.cached" in _LOGGERS_CACHE

    @staticmethod
    def test_propagate_disabled(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.propagate", log_dir=tmp_path)
        assert logger.propagate is False

    @staticmethod
    def test_writes_to_file(tmp_path: Path) -> None:
        logger = setup_logger("enrichment.test.file", log_dir=tmp_path)
        logger.warning("Error fetching rating")
        for handler in logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob("enrichment_test_file_*.log")
        assert "Error fetching rating" in log_file.read_text(encoding="utf-8")


class TestResetLoggers:
    @staticmethod
    def test_clears_cache_and_handlers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(logger_module, "_LOGGERS_CACHE", {})
        logger = setup_logger("enrichment.test.reset", log_dir=tmp_path)

        reset_loggers()

        assert "enrichment.test.reset" not in logger_module._LOGGERS_CACHE
        assert logger.handlers == []


class TestComponentLoggers:
    @staticmethod
    @pytest.mark.parametrize(
        ("module", "name"),
        [
            (cache, "enrichment.cache"),
            (credentials, "enrichment.credentials"),
            (omdb_client, "enrichment.omdb"),
            (scanner, "enrichment.scanner"),
            (watcher, "enrichment.watcher"),
        ],
    )
    def test_module_logger_is_configured(module: ModuleType, name: str) -> None:
        component_logger = module.logger

        assert component_logger.name == name
        assert component_logger is _LOGGERS_CACHE[name]
        assert component_logger.propagate is False
        assert component_logger.level == settings.logging.level_number
        assert any(isinstance(h, logging.StreamHandler) for h in component_logger.handlers)


class TestCreateConsoleHandler:
    @staticmethod
    def test_returns_stream_handler() -> None:
        formatter = logging.Formatter("%(message)s")
        handler = _create_console_handler(formatter, logging.INFO)
        assert isinstance(handler, logging.StreamHandler)
        assert handler.formatter is formatter

    @staticmethod
    def test_level_set() -> None:
        formatter = logging.Formatter("%(message)s")
        handler = _create_console_handler(formatter, logging.WARNING)
        assert handler.level == logging.WARNING


class TestCreateFileHandler:
    @staticmethod
    def test_returns_file_handler(tmp_path: Path) -> None:
        formatter = logging.Formatter("%(message)s")
        handler = _create_file_handler("test", formatter, logging.INFO, tmp_path)
        assert isinstance(handler, logging.FileHandler)
        handler.close()

    @staticmethod
    def test_unwritable_directory(tmp_path: Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        formatter = logging.Formatter("%(message)s")

        assert _create_file_handler("test", formatter, logging.INFO, blocker / "logs") is None


class TestGetLogFilePath:
    @staticmethod
    def test_creates_directory(tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        path = _get_log_file_path("test.name", log_dir)
        assert log_dir.exists()
        assert path.parent == log_dir

    @staticmethod
    def test_filename_format(tmp_path: Path) -> None:
        path = _get_log_file_path("enrichment.session", tmp_path)
        assert path.name.startswith("enrichment_session_")
        assert path.suffix == ".log"

    @staticmethod
    def test_default_dir_from_settings() -> None:
        path = _get_log_file_path("test", None)
        assert path.parent == settings.paths.logs_dir


class TestBuildFormatter:
    @staticmethod
    def test_text_format() -> None:
        formatter = build_formatter("text")
        assert not isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert formatter._fmt is not None and "%(name)s" in formatter._fmt

    @staticmethod
    def test_json_format() -> None:
        assert isinstance(build_formatter("JSON"), structlog.stdlib.ProcessorFormatter)

    @staticmethod
    def test_json_line_fields() -> None:
        record = logging.LogRecord(
            "enrichment.session", logging.WARNING, __file__, 1, "No key for %s", ("Amour",), None
        )

        entry = json.loads(build_formatter("json").format(record))

        assert entry["event"] == "No key for Amour"
        assert entry["logger"] == "enrichment.session"
        assert entry["level"] == "warning"
        assert "timestamp" in entry

    @staticmethod
    def test_json_line_exception() -> None:
        try:
            raise ValueError("bad payload")
        except ValueError:
            record = logging.LogRecord(
                "enrichment.orchestrator", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        entry = json.loads(build_formatter("json").format(record))

        assert "ValueError: bad payload" in entry["exception"]
