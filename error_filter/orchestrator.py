"""
Error filter lifecycle owner.

This module wires the snapshot store, cache, policy engine, sink and
dispatcher into one explicitly constructed component, and provides the
bootstrap function hosts call at startup.
"""

import atexit
import logging
import threading
from typing import Callable, List, Optional

from error_filter.config.settings import Settings, get_settings
from error_filter.exceptions import ErrorFilterError
from error_filter.integrations.logging_filter import DuplicateRecordFilter
from error_filter.integrations.warnings_hook import WarningsHook
from error_filter.models import CacheStats, DiagnosticEvent, Disposition
from error_filter.services.event_dispatcher import EventDispatcher
from error_filter.services.expiring_cache import ExpiringCache
from error_filter.services.log_sink import LogSink
from error_filter.services.policy_engine import PolicyEngine
from error_filter.services.snapshot_store import SnapshotStore
from error_filter.services.stats_reporter import StatsReporter
from error_filter.utils.structured_logger import configure_filter_logging, log_error

logger = logging.getLogger(__name__)


class ErrorFilter:
    """
    Composition root for duplicate diagnostic filtering.

    This class owns:
    - The snapshot store and the cache loaded from it
    - The policy engine built from the immutable PolicyConfig
    - The destination log sink
    - The dispatcher every host adapter calls
    - Installed host adapters, which shutdown() removes again

    The instance is created once per process and passed to whatever needs
    it; there is no module-level cache.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize error filter.

        Loads the persisted snapshot and drops expired entries.

        Args:
            settings: Settings instance (reads the environment if None)
        """
        self.settings = settings or get_settings()
        self.config = self.settings.to_policy_config()

        self.store = SnapshotStore(self.settings.cache_file)
        self.cache = ExpiringCache.from_policy(
            self.config,
            store=self.store,
            cleanup_interval=self.settings.cleanup_interval,
            flush_every=self.settings.flush_every,
            flush_interval=self.settings.flush_interval
        )
        self.cache.load()

        self.policy = PolicyEngine(self.config)
        self.sink = LogSink(
            self.settings.log_file,
            enabled=self.settings.write_log,
            timezone=self.settings.tzinfo()
        )
        self.dispatcher = EventDispatcher(self.policy, self.cache, self.sink)
        self.reporter = StatsReporter(self.cache, self.store)

        self._warnings_hook: Optional[WarningsHook] = None
        self._logging_filters: List[tuple] = []
        self._shutdown = False
        self._lock = threading.Lock()

        logger.info(
            f"Initialized ErrorFilter: duration={self.config.cache_duration}s, "
            f"max_entries={self.config.max_entries}, log={self.sink.path}"
        )

    def handle(self, event: DiagnosticEvent) -> bool:
        """
        Run an event through the filter.

        Args:
            event: Diagnostic event from the host

        Returns:
            True if handled (suppress the host default), False otherwise
        """
        return self.dispatcher.handle(event)

    def dispatch(self, event: DiagnosticEvent) -> Disposition:
        """Run an event through the filter and return its disposition."""
        return self.dispatcher.dispatch(event)

    def stats(self) -> CacheStats:
        """Cache occupancy, snapshot size and oldest entry."""
        return self.reporter.stats()

    def install(self, clock: Callable[[], float] = None) -> 'ErrorFilter':
        """
        Install the warnings hook.

        Args:
            clock: Source of event timestamps (default: time.time)

        Returns:
            self, for chaining
        """
        with self._lock:
            if self._warnings_hook is None:
                self._warnings_hook = WarningsHook(self.dispatcher, clock=clock)
            self._warnings_hook.install()
        return self

    def attach_logging(self, target=None) -> DuplicateRecordFilter:
        """
        Attach a DuplicateRecordFilter to a logger or handler.

        Args:
            target: logging.Logger or logging.Handler (default: root logger)

        Returns:
            The attached filter
        """
        if target is None:
            target = logging.getLogger()
        record_filter = self.logging_filter()
        target.addFilter(record_filter)
        with self._lock:
            self._logging_filters.append((target, record_filter))
        return record_filter

    def logging_filter(self) -> DuplicateRecordFilter:
        """New DuplicateRecordFilter bound to this filter's dispatcher."""
        return DuplicateRecordFilter(self.dispatcher)

    def shutdown(self) -> None:
        """
        Remove installed adapters and flush the cache.

        Safe to call more than once.
        """
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True

            if self._warnings_hook is not None:
                self._warnings_hook.uninstall()

            for target, record_filter in self._logging_filters:
                target.removeFilter(record_filter)
            self._logging_filters = []

        self.cache.close()
        logger.info("ErrorFilter shut down")

    def __enter__(self) -> 'ErrorFilter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def install_error_filter(
    settings: Optional[Settings] = None,
    attach_logging: bool = False,
    register_atexit: bool = True
) -> Optional[ErrorFilter]:
    """
    Build, install and register an ErrorFilter for this process.

    Configuration or startup failures are logged and leave the host
    unfiltered; they never raise.

    Args:
        settings: Settings instance (reads the environment if None)
        attach_logging: Also attach a DuplicateRecordFilter to the root logger
        register_atexit: Flush the cache at interpreter exit

    Returns:
        The installed ErrorFilter, or None if it could not be built
    """
    try:
        settings = settings or get_settings()
    except ErrorFilterError as e:
        configure_filter_logging(debug=False)
        log_error(logger, 'bootstrap', type(e).__name__, str(e), exc_info=False)
        return None

    configure_filter_logging(debug=settings.debug, use_json=settings.log_json)

    # Startup must never take the host down, whatever the component raises
    try:
        error_filter = ErrorFilter(settings)
    except Exception as e:
        log_error(logger, 'bootstrap', type(e).__name__, str(e))
        return None

    error_filter.install()
    if attach_logging:
        error_filter.attach_logging()

    if register_atexit:
        atexit.register(error_filter.shutdown)

    return error_filter
