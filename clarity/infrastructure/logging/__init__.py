"""Logging infrastructure module."""

from clarity.infrastructure.logging.logger import StructuredLogger, setup_logging

__all__ = [
    "StructuredLogger",
    "setup_logging",
]
