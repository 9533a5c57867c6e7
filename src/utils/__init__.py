# src/utils/__init__.py
"""Utility functions for hoard."""

from src.utils.logging import (
    configure_structured_logging,
    get_logger,
    get_operation,
    set_operation,
)

__all__ = [
    "get_logger",
    "set_operation",
    "get_operation",
    "configure_structured_logging",
]
