"""
Policy configuration data model.

This module defines the immutable configuration value object that the
policy engine and the cache are built from. It is constructed once at
startup and shared by reference.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from .severity import (
    Severity,
    UNCOVERABLE_SEVERITIES,
    NOTICE_SEVERITIES,
    WARNING_SEVERITIES,
    DEPRECATED_SEVERITIES,
)

DEFAULT_CACHE_DURATION_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 1000

DEFAULT_FILTERED_SEVERITIES: FrozenSet[Severity] = (
    NOTICE_SEVERITIES | WARNING_SEVERITIES | DEPRECATED_SEVERITIES
)


@dataclass(frozen=True)
class PolicyConfig:
    """
    Configuration for deduplication policy.

    Attributes:
        cache_duration: Dedup window in seconds (default: 86400)
        filtered_severities: Severities the filter manages; uncoverable
            severities are removed on construction
        whitelist_patterns: Patterns that always log, checked first
        blacklist_patterns: Patterns that always suppress
        max_entries: Maximum number of cached fingerprints (default: 1000)
    """

    cache_duration: int = DEFAULT_CACHE_DURATION_SECONDS
    filtered_severities: FrozenSet[Severity] = DEFAULT_FILTERED_SEVERITIES
    whitelist_patterns: Tuple[str, ...] = field(default_factory=tuple)
    blacklist_patterns: Tuple[str, ...] = field(default_factory=tuple)
    max_entries: int = DEFAULT_MAX_ENTRIES

    def __post_init__(self):
        """Normalize collections and validate ranges."""
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(
            self,
            'filtered_severities',
            frozenset(Severity(s) for s in self.filtered_severities) - UNCOVERABLE_SEVERITIES
        )
        object.__setattr__(self, 'whitelist_patterns', tuple(self.whitelist_patterns))
        object.__setattr__(self, 'blacklist_patterns', tuple(self.blacklist_patterns))
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If any parameter is outside its valid range
        """
        if self.cache_duration < 1:
            raise ValueError(
                f"cache_duration must be at least 1, got {self.cache_duration}"
            )

        if self.max_entries < 1:
            raise ValueError(
                f"max_entries must be at least 1, got {self.max_entries}"
            )
