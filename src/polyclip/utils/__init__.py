"""Utility functions for polyclip.

This module provides:

- Logging setup and configuration
- Operation statistics tracking
"""

from polyclip.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
