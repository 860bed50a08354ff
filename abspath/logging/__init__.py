"""Structured logging for abspath tools.

The library modules themselves log through the standard ``logging`` module
and install no handlers; this package backs the command-line tool.
"""

from .redaction import DataRedactor
from .structured import LogLevel, StructuredLogger, create_logger

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "create_logger",
    "DataRedactor",
]
