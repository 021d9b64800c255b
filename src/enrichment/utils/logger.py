"""Enrichment logging: one console handler plus a dated log file per logger.

Every component asks for its logger through ``setup_logger`` with an
``enrichment.*`` name. Level and output format come from the logging
settings (LOG_LEVEL, LOG_FORMAT).
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

import structlog

from src.settings import settings

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%H:%M:%S"

_LOGGERS_CACHE: dict[str, logging.Logger] = {}


# Applied to plain stdlib records before JSON rendering
_JSON_PRE_CHAIN = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.format_exc_info,
]


def setup_logger(
    name: str,
    level: int | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the configured logger for a component.

    Loggers are built once and cached by name; they do not propagate to
    the root logger.

    Args:
        name: Logger name (e.g., 'enrichment.orchestrator').
        level: Logging level. Defaults to LOG_LEVEL.
        log_dir: Directory for log files. Defaults to the settings logs dir.

    Returns:
        Configured logger instance.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    if level is None:
        level = settings.logging.level_number

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = build_formatter(settings.logging.format)
    handlers = [
        _create_console_handler(formatter, level),
        _create_file_handler(name, formatter, level, log_dir),
    ]
    for handler in handlers:
        if handler is not None:
            logger.addHandler(handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def reset_loggers() -> None:
    """Close every cached handler and forget the configured loggers."""
    for logger in _LOGGERS_CACHE.values():
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    _LOGGERS_CACHE.clear()


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for a LOG_FORMAT value ("json", anything else is text).

    JSON lines are rendered by structlog: one object per record with
    ``event``, ``logger``, ``level``, ``timestamp`` and, when present,
    ``exception``.
    """
    if log_format.lower() == "json":
        return structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            foreign_pre_chain=_JSON_PRE_CHAIN,
        )
    return logging.Formatter(TEXT_FORMAT, TEXT_DATE_FORMAT)


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path | None,
) -> logging.FileHandler | None:
    """Create a handler appending to today's file for this logger.

    Returns:
        Configured FileHandler, or None when the directory is not writable.
    """
    try:
        handler = logging.FileHandler(_get_log_file_path(name, log_dir), encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None

    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _get_log_file_path(name: str, log_dir: Path | None) -> Path:
    """Build ``<log_dir>/<name>_<YYYYMMDD>.log``, creating the directory."""
    directory = log_dir if log_dir is not None else settings.paths.logs_dir
    directory.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(".", "_").replace("/", "_")
    return directory / f"{safe_name}_{datetime.now():%Y%m%d}.log"
