"""abspath runtime settings.

All settings are backed by environment variables following the ABSPATH_*
naming convention and are read once, at import time.

Example:
    >>> from abspath.config import LOG
    >>> LOG.max_files
    5

Environment Variables:
    ABSPATH_LOG_DIR: Directory for JSON-lines log files (default: unset, no file)
    ABSPATH_LOG_CONSOLE: Mirror structured log lines to stderr (default: false)
    ABSPATH_LOG_MAX_SIZE_MB: Rotate the log file above this size, 0 disables (default: 0)
    ABSPATH_LOG_MAX_FILES: Rotated log files to keep (default: 5)
    ABSPATH_REDACT_HOME: Replace the home directory with ~ in logged values (default: true)
"""

from __future__ import annotations

from abspath.config.defaults import LOG, LoggingDefaults

__all__ = ["LOG", "LoggingDefaults"]
