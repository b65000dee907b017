"""
Duplicate diagnostic filter.

This package intercepts warnings, notices and deprecation diagnostics,
suppresses repeats of the same diagnostic inside a configurable time
window, and appends the first occurrence to a destination log. The dedup
window is persisted so it survives process restarts.
"""

from .orchestrator import ErrorFilter, install_error_filter
from .models import DiagnosticEvent, Disposition, Severity, PolicyConfig, CacheStats
from .config import Settings, get_settings
from .utils import fingerprint

__version__ = "1.0.0"

__all__ = [
    'ErrorFilter',
    'install_error_filter',
    'DiagnosticEvent',
    'Disposition',
    'Severity',
    'PolicyConfig',
    'CacheStats',
    'Settings',
    'get_settings',
    'fingerprint',
]
