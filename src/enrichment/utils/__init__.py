"""Enrichment utilities."""

from src.enrichment.utils.logger import reset_loggers, setup_logger

__all__ = ["setup_logger", "reset_loggers"]
