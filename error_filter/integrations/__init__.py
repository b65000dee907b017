"""
Host adapters that route diagnostics into the dispatcher.
"""

from .warnings_hook import WarningsHook, severity_for_category
from .logging_filter import DuplicateRecordFilter, severity_for_level

__all__ = [
    'WarningsHook',
    'severity_for_category',
    'DuplicateRecordFilter',
    'severity_for_level'
]
