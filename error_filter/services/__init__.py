"""
Services implementing the error filter pipeline.

This module provides the snapshot store, dedup cache, policy engine, log
sink, event dispatcher and stats reporter.
"""

from .snapshot_store import SnapshotStore
from .expiring_cache import ExpiringCache
from .policy_engine import PolicyEngine
from .log_sink import LogSink, format_event_line
from .event_dispatcher import EventDispatcher
from .stats_reporter import StatsReporter

__all__ = [
    'SnapshotStore',
    'ExpiringCache',
    'PolicyEngine',
    'LogSink',
    'format_event_line',
    'EventDispatcher',
    'StatsReporter'
]
