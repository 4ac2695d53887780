"""Utility functions for pages-await."""

from pages_await.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
