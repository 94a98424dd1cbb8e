# Area: Shared
"""
Shared utilities used by both the lifecycle and timing packages.

This package contains:
- Logging configuration
- Timestamp parsing helpers
"""

from .logging_config import setup_logging, log_operation_error
from .timestamps import parse_timestamp, resolve_now, utc_now, to_iso

__all__ = [
    "setup_logging",
    "log_operation_error",
    "parse_timestamp",
    "resolve_now",
    "utc_now",
    "to_iso",
]
