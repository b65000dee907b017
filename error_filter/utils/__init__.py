"""
Utility functions for the error filter.

This module provides fingerprinting, pattern compilation, timezone resolution and
structured logging helpers.
"""

from .fingerprinting import fingerprint, event_fingerprint
from .patterns import compile_pattern, compile_patterns, first_match, split_delimited
from .timezones import resolve_timezone
from .structured_logger import (
    PACKAGE_LOGGER_NAME,
    StructuredFormatter,
    configure_filter_logging,
    log_event_decision,
    log_persistence_failure,
    log_error
)

__all__ = [
    'fingerprint',
    'event_fingerprint',
    'compile_pattern',
    'compile_patterns',
    'first_match',
    'split_delimited',
    'resolve_timezone',
    'PACKAGE_LOGGER_NAME',
    'StructuredFormatter',
    'configure_filter_logging',
    'log_event_decision',
    'log_persistence_failure',
    'log_error'
]
