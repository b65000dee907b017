"""
Severity levels for diagnostic events.

This module defines the severity enumeration, the display label table used
when formatting log lines, and the severity classes that the configuration
toggles switch on and off.
"""

from enum import Enum
from typing import FrozenSet


class Severity(str, Enum):
    """
    Severity of a diagnostic event.

    The USER_* variants are diagnostics raised deliberately by application
    code; the plain variants come from the runtime or libraries.
    """

    FATAL = 'FATAL'
    PARSE = 'PARSE'
    ERROR = 'ERROR'
    WARNING = 'WARNING'
    USER_WARNING = 'USER_WARNING'
    NOTICE = 'NOTICE'
    USER_NOTICE = 'USER_NOTICE'
    DEPRECATED = 'DEPRECATED'
    USER_DEPRECATED = 'USER_DEPRECATED'


UNKNOWN_SEVERITY_LABEL = 'Unknown Error'

SEVERITY_LABELS = {
    Severity.FATAL: 'Fatal Error',
    Severity.PARSE: 'Parse Error',
    Severity.ERROR: 'Error',
    Severity.WARNING: 'Warning',
    Severity.USER_WARNING: 'User Warning',
    Severity.NOTICE: 'Notice',
    Severity.USER_NOTICE: 'User Notice',
    Severity.DEPRECATED: 'Deprecated',
    Severity.USER_DEPRECATED: 'User Deprecated',
}

# Never intercepted; always left to the host's default handling
UNCOVERABLE_SEVERITIES: FrozenSet[Severity] = frozenset({
    Severity.FATAL,
    Severity.PARSE,
})

NOTICE_SEVERITIES: FrozenSet[Severity] = frozenset({
    Severity.NOTICE,
    Severity.USER_NOTICE,
})

WARNING_SEVERITIES: FrozenSet[Severity] = frozenset({
    Severity.WARNING,
    Severity.USER_WARNING,
})

DEPRECATED_SEVERITIES: FrozenSet[Severity] = frozenset({
    Severity.DEPRECATED,
    Severity.USER_DEPRECATED,
})


def severity_label(severity) -> str:
    """
    Get the human-readable label for a severity.

    Args:
        severity: Severity member, or any value a host handed over

    Returns:
        Display label, or 'Unknown Error' for unrecognized values

    Examples:
        >>> severity_label(Severity.USER_WARNING)
        'User Warning'
        >>> severity_label('SOMETHING_ELSE')
        'Unknown Error'
    """
    try:
        return SEVERITY_LABELS[Severity(severity)]
    except (ValueError, KeyError):
        return UNKNOWN_SEVERITY_LABEL


def severities_for_toggles(
    notices: bool,
    warnings: bool,
    deprecated: bool
) -> FrozenSet[Severity]:
    """
    Build the filtered severity set from per-class toggles.

    Args:
        notices: Filter NOTICE and USER_NOTICE
        warnings: Filter WARNING and USER_WARNING
        deprecated: Filter DEPRECATED and USER_DEPRECATED

    Returns:
        Frozen set of severities the filter manages
    """
    selected = set()
    if notices:
        selected |= NOTICE_SEVERITIES
    if warnings:
        selected |= WARNING_SEVERITIES
    if deprecated:
        selected |= DEPRECATED_SEVERITIES
    return frozenset(selected)
