"""
Statistics reporter for the dedup cache.
"""

import logging
from typing import Optional

from error_filter.models import CacheStats
from error_filter.services.expiring_cache import ExpiringCache
from error_filter.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class StatsReporter:
    """
    Read-only summary of cache occupancy and snapshot size.

    Never writes the snapshot; the expiry cleanup it triggers only affects
    the in-memory state.
    """

    def __init__(self, cache: ExpiringCache, store: Optional[SnapshotStore] = None):
        """
        Initialize stats reporter.

        Args:
            cache: Cache to summarize
            store: Snapshot store whose file size is reported (default: the
                cache's own store)
        """
        self.cache = cache
        self.store = store if store is not None else cache.store

    def stats(self, now: Optional[float] = None) -> CacheStats:
        """
        Report entry count, snapshot size and oldest entry.

        Runs an expiry cleanup first so the figures reflect the logical
        (non-expired) state.

        Args:
            now: Current epoch seconds (default: time.time())

        Returns:
            CacheStats snapshot
        """
        removed = self.cache.cleanup_expired(now)
        if removed:
            logger.debug(f"Stats cleanup removed {removed} expired entries")

        return CacheStats(
            entry_count=self.cache.size(),
            storage_size_bytes=self.store.size_bytes() if self.store is not None else 0,
            oldest_entry_timestamp=self.cache.oldest_timestamp()
        )
