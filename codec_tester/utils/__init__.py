"""Shared utilities."""

from codec_tester.utils.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
