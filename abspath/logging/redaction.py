"""Sensitive data redaction for structured logging."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

from ..errors import ExpansionError
from ..environment import PathEnvironment, resolve_environment


class DataRedactor:
    """Redact sensitive information from log data."""

    def __init__(
        self,
        custom_patterns: Optional[List[Pattern[str]]] = None,
        *,
        redact_home: bool = True,
        env: Optional[PathEnvironment] = None,
    ) -> None:
        """Initialize redactor with standard and custom patterns.

        Args:
            custom_patterns: Additional regex patterns to redact
            redact_home: Replace the current home directory with ``~``
            env: Where to look the home directory up (default: the host)
        """
        self.patterns = [
            # Tokens and API keys (common patterns)
            re.compile(
                r'(token|key|secret|password|api_key|credential)["\']?\s*[=:]\s*["\']?[a-zA-Z0-9_-]{8,}["\']?',
                re.IGNORECASE,
            ),
        ]

        if custom_patterns:
            self.patterns.extend(custom_patterns)

        # Sensitive field names to redact entirely
        self.sensitive_fields = {
            'password', 'token', 'secret', 'key', 'auth', 'credential',
            'api_key', 'access_token', 'refresh_token', 'auth_token'
        }

        self.home: Optional[str] = None
        self._home_re: Optional[Pattern[str]] = None
        if redact_home:
            try:
                home = resolve_environment(env).home_dir()
            except ExpansionError:
                home = None
            # a home of "/" would turn every path into "~..."
            if home and home.rstrip(os.sep + (os.altsep or "")):
                self.home = os.path.normpath(home)
                # whole directory names only: /home/al must not eat /home/alice
                self._home_re = re.compile(re.escape(self.home) + r"(?=$|[\s/\\'\"])")

    def redact_string(self, text: str) -> str:
        """Redact sensitive information from a string.

        Args:
            text: Input text to redact

        Returns:
            Redacted text with sensitive data replaced
        """
        result = text
        if self._home_re is not None:
            result = self._home_re.sub("~", result)

        for pattern in self.patterns:
            result = pattern.sub('[REDACTED]', result)

        return result

    def redact_path(self, path: Union[str, os.PathLike[str]]) -> str:
        """Render a path for logging with the home directory shortened to ``~``."""
        return self.redact_string(os.fspath(path))

    def redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively redact sensitive data from dictionary.

        Args:
            data: Dictionary to redact

        Returns:
            Dictionary with sensitive data redacted
        """
        result = {}

        for key, value in data.items():
            if key.lower() in self.sensitive_fields:
                result[key] = "[REDACTED]"
                continue

            if isinstance(value, dict):
                result[key] = self.redact_dict(value)
            elif isinstance(value, (list, tuple)):
                result[key] = [self._redact_value(item) for item in value]
            else:
                result[key] = self._redact_value(value)

        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_dict(value)
        if isinstance(value, str):
            return self.redact_string(value)
        # AbsolutePath and pathlib paths both implement __fspath__
        if isinstance(value, (Path, os.PathLike)):
            return self.redact_path(value)
        return value

    def add_pattern(self, pattern: Union[str, Pattern[str]]) -> None:
        """Add custom redaction pattern.

        Args:
            pattern: Regex pattern (string or compiled) to add
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.patterns.append(pattern)

    def add_sensitive_field(self, field_name: str) -> None:
        """Add field name to redact entirely.

        Args:
            field_name: Field name to redact (case-insensitive)
        """
        self.sensitive_fields.add(field_name.lower())
