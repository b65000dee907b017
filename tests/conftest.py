"""
Shared pytest fixtures for error-filter tests.
"""

import logging
import os
import warnings
from unittest.mock import patch

import pytest

from error_filter.config import reset_settings
from error_filter.models import DiagnosticEvent, PolicyConfig, Severity
from error_filter.services import (
    EventDispatcher,
    ExpiringCache,
    LogSink,
    PolicyEngine,
    SnapshotStore
)


@pytest.fixture(autouse=True)
def clean_environment():
    """Isolate tests from ERROR_FILTER_* variables and global state."""
    saved_showwarning = warnings.showwarning
    filtered_env = {k: v for k, v in os.environ.items() if not k.startswith('ERROR_FILTER_')}
    with patch.dict(os.environ, filtered_env, clear=True):
        reset_settings()
        yield
    reset_settings()
    warnings.showwarning = saved_showwarning

    package_logger = logging.getLogger('error_filter')
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def warning_event():
    """Fixture providing a warning event at t=0."""
    return DiagnosticEvent(
        severity=Severity.WARNING,
        message='X',
        source_location='a.py',
        line=10,
        timestamp=0
    )


@pytest.fixture
def default_policy():
    """Fixture providing default policy configuration."""
    return PolicyConfig()


@pytest.fixture
def snapshot_path(tmp_path):
    """Fixture providing a snapshot path inside a temp directory."""
    return str(tmp_path / 'debug-cache.json')


@pytest.fixture
def log_path(tmp_path):
    """Fixture providing a destination log path inside a temp directory."""
    return str(tmp_path / 'debug.log')


@pytest.fixture
def store(snapshot_path):
    """Fixture providing a snapshot store."""
    return SnapshotStore(snapshot_path)


@pytest.fixture
def make_dispatcher(store, log_path):
    """Factory fixture building a dispatcher from policy overrides."""
    def _make(**policy_overrides):
        config = PolicyConfig(**policy_overrides)
        cache = ExpiringCache.from_policy(config, store=store)
        cache.load()
        return EventDispatcher(PolicyEngine(config), cache, LogSink(log_path))
    return _make
