"""Shared utilities for viewrender."""

from ._logging import create_logger, get_logger

__all__ = [
    "create_logger",
    "get_logger",
]
