"""
Configuration module for the error filter.

Provides environment variable loading for the dedup window, severity
toggles, pattern lists and file locations.
"""

from .settings import Settings, get_settings, reset_settings

__all__ = ['Settings', 'get_settings', 'reset_settings']
