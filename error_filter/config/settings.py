"""
Configuration settings for the error filter.

Loads configuration from environment variables with sensible defaults.
Settings are read once at startup; reloading is the host's concern.

Pattern lists are empty by default. A typical starting point keeps
critical messages visible and silences well-known noise:

    ERROR_FILTER_WHITELIST='["/Fatal error/", "/Parse error/", "/Call to undefined function/"]'
    ERROR_FILTER_BLACKLIST='["/Function _load_textdomain_just_in_time was called.*incorrectly/",
                             "/Translation loading for the.*domain was triggered too early/"]'
"""

import json
import os
from datetime import tzinfo as TzInfo
from typing import List, Optional
from zoneinfo import ZoneInfoNotFoundError

from error_filter.exceptions import ConfigurationError
from error_filter.models import PolicyConfig, severities_for_toggles
from error_filter.utils.timezones import resolve_timezone


class Settings:
    """
    Configuration settings for duplicate diagnostic filtering.

    All settings are loaded from environment variables with defaults.
    """

    def __init__(self):
        """
        Initialize settings from environment variables.

        Raises:
            ConfigurationError: If any variable is malformed or out of range
        """
        self._errors: List[str] = []

        # Dedup window
        self.cache_duration: int = self._parse_int('ERROR_FILTER_CACHE_DURATION', 24 * 60 * 60)

        # Severity classes to filter
        self.filter_notices: bool = self._parse_bool(os.getenv('ERROR_FILTER_NOTICES', 'true'))
        self.filter_warnings: bool = self._parse_bool(os.getenv('ERROR_FILTER_WARNINGS', 'true'))
        self.filter_deprecated: bool = self._parse_bool(
            os.getenv('ERROR_FILTER_DEPRECATED', 'true')
        )

        # Cache bounds and maintenance
        self.max_cache_entries: int = self._parse_int('ERROR_FILTER_MAX_CACHE_ENTRIES', 1000)
        self.cleanup_interval: int = self._parse_int('ERROR_FILTER_CLEANUP_INTERVAL', 60 * 60)

        # Persistence batching: 1 means write-through. Larger values trade
        # the most recent mutations on an unclean shutdown for throughput.
        self.flush_every: int = self._parse_int('ERROR_FILTER_FLUSH_EVERY', 1)
        self.flush_interval: float = self._parse_float('ERROR_FILTER_FLUSH_INTERVAL', 0.0)

        # Pattern lists (JSON arrays, ordered)
        self.whitelist: List[str] = self._parse_patterns('ERROR_FILTER_WHITELIST')
        self.blacklist: List[str] = self._parse_patterns('ERROR_FILTER_BLACKLIST')

        # Files
        self.log_file: str = os.getenv('ERROR_FILTER_LOG_FILE', 'debug.log')
        self.cache_file: str = os.getenv('ERROR_FILTER_CACHE_FILE', 'debug-cache.json')
        self.write_log: bool = self._parse_bool(os.getenv('ERROR_FILTER_WRITE_LOG', 'true'))
        self.timezone: str = os.getenv('ERROR_FILTER_TIMEZONE', 'UTC')

        # Logging Configuration
        self.debug: bool = self._parse_bool(os.getenv('ERROR_FILTER_DEBUG', 'false'))
        self.log_json: bool = self._parse_bool(os.getenv('ERROR_FILTER_LOG_JSON', 'true'))

        self._validate()

    def to_policy_config(self) -> PolicyConfig:
        """
        Build the immutable policy configuration.

        Returns:
            PolicyConfig for the policy engine and cache
        """
        return PolicyConfig(
            cache_duration=self.cache_duration,
            filtered_severities=severities_for_toggles(
                notices=self.filter_notices,
                warnings=self.filter_warnings,
                deprecated=self.filter_deprecated
            ),
            whitelist_patterns=tuple(self.whitelist),
            blacklist_patterns=tuple(self.blacklist),
            max_entries=self.max_cache_entries
        )

    def tzinfo(self) -> TzInfo:
        """Timezone object for log line timestamps."""
        return resolve_timezone(self.timezone)

    def _parse_bool(self, value: str) -> bool:
        """
        Parse boolean value from string.

        Args:
            value: String value to parse

        Returns:
            Boolean value
        """
        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _parse_int(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw.strip() == '':
            return default
        try:
            return int(raw)
        except ValueError:
            self._errors.append(f"{name} must be an integer, got {raw!r}")
            return default

    def _parse_float(self, name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or raw.strip() == '':
            return default
        try:
            return float(raw)
        except ValueError:
            self._errors.append(f"{name} must be a number, got {raw!r}")
            return default

    def _parse_patterns(self, name: str) -> List[str]:
        raw = os.getenv(name)
        if raw is None or raw.strip() == '':
            return []
        try:
            patterns = json.loads(raw)
        except ValueError:
            self._errors.append(f"{name} must be a JSON array of strings")
            return []
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            self._errors.append(f"{name} must be a JSON array of strings")
            return []
        return patterns

    def _validate(self):
        """Validate configuration values."""
        errors = self._errors

        if self.cache_duration < 1:
            errors.append(
                f"ERROR_FILTER_CACHE_DURATION must be at least 1, got {self.cache_duration}"
            )

        if self.max_cache_entries < 1:
            errors.append(
                f"ERROR_FILTER_MAX_CACHE_ENTRIES must be at least 1, got {self.max_cache_entries}"
            )

        if self.cleanup_interval < 0:
            errors.append(
                f"ERROR_FILTER_CLEANUP_INTERVAL must be non-negative, got {self.cleanup_interval}"
            )

        if self.flush_every < 1:
            errors.append(f"ERROR_FILTER_FLUSH_EVERY must be at least 1, got {self.flush_every}")

        if self.flush_interval < 0:
            errors.append(
                f"ERROR_FILTER_FLUSH_INTERVAL must be non-negative, got {self.flush_interval}"
            )

        try:
            resolve_timezone(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Invalid ERROR_FILTER_TIMEZONE: {self.timezone}")

        if errors:
            raise ConfigurationError("Invalid error filter configuration", validation_errors=errors)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance so the next get_settings() rereads."""
    global _settings
    _settings = None
