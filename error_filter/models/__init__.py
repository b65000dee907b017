"""
Data models for the error filter.

This module provides enums and dataclasses for diagnostic events, policy
configuration, decisions and cache statistics.
"""

from .severity import (
    Severity,
    SEVERITY_LABELS,
    UNKNOWN_SEVERITY_LABEL,
    UNCOVERABLE_SEVERITIES,
    NOTICE_SEVERITIES,
    WARNING_SEVERITIES,
    DEPRECATED_SEVERITIES,
    severity_label,
    severities_for_toggles
)
from .event import DiagnosticEvent
from .decisions import PolicyDecision, CacheDecision, Disposition
from .policy_config import PolicyConfig
from .cache_stats import CacheStats

__all__ = [
    'Severity',
    'SEVERITY_LABELS',
    'UNKNOWN_SEVERITY_LABEL',
    'UNCOVERABLE_SEVERITIES',
    'NOTICE_SEVERITIES',
    'WARNING_SEVERITIES',
    'DEPRECATED_SEVERITIES',
    'severity_label',
    'severities_for_toggles',
    'DiagnosticEvent',
    'PolicyDecision',
    'CacheDecision',
    'Disposition',
    'PolicyConfig',
    'CacheStats'
]
