"""
Expiring cache for diagnostic event deduplication.

This module provides the cache that decides whether an event fingerprint is
novel or a repeat inside the dedup window. The cache is bounded, cleans up
expired entries opportunistically, and is backed by a SnapshotStore so the
window survives process restarts.
"""

import logging
import threading
import time
from typing import Dict, Optional

from error_filter.exceptions import PersistenceWriteError
from error_filter.models import CacheDecision, PolicyConfig
from error_filter.services.snapshot_store import SnapshotStore
from error_filter.utils.structured_logger import log_persistence_failure

logger = logging.getLogger(__name__)


class ExpiringCache:
    """
    Thread-safe fingerprint -> last_seen cache with a dedup window.

    An entry whose age is at least cache_duration is logically absent even
    before cleanup removes it. The entry count never exceeds max_entries;
    making room evicts expired entries first, then the smallest last_seen.

    Persistence is write-through by default (flush_every=1). Raising
    flush_every or setting flush_interval batches snapshot writes; up to
    that many of the most recent mutations are lost on an unclean shutdown.

    Attributes:
        cache_duration: Dedup window in seconds
        max_entries: Maximum number of cached fingerprints
        cleanup_interval: Seconds between opportunistic cleanups
        flush_every: Pending mutations that trigger a snapshot write
        flush_interval: Seconds after which pending mutations are written
            regardless of count (0 disables)
    """

    def __init__(
        self,
        cache_duration: int,
        max_entries: int,
        store: Optional[SnapshotStore] = None,
        cleanup_interval: float = 3600.0,
        flush_every: int = 1,
        flush_interval: float = 0.0
    ):
        """
        Initialize expiring cache.

        Args:
            cache_duration: Dedup window in seconds
            max_entries: Maximum number of cached fingerprints
            store: Snapshot store (None keeps the cache memory-only)
            cleanup_interval: Seconds between opportunistic cleanups
            flush_every: Pending mutations that trigger a snapshot write
            flush_interval: Max seconds between snapshot writes while
                mutations are pending (0 disables)
        """
        if cache_duration < 1:
            raise ValueError(f"cache_duration must be at least 1, got {cache_duration}")
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        if flush_every < 1:
            raise ValueError(f"flush_every must be at least 1, got {flush_every}")

        self.cache_duration = int(cache_duration)
        self.max_entries = int(max_entries)
        self.cleanup_interval = float(cleanup_interval)
        self.flush_every = int(flush_every)
        self.flush_interval = float(flush_interval)
        self.store = store

        self._entries: Dict[str, int] = {}
        self._lock = threading.RLock()
        self._pending_mutations = 0
        self._last_cleanup = 0.0
        self._last_flush = time.time()

        logger.debug(
            f"ExpiringCache initialized with duration={self.cache_duration}s, "
            f"max_entries={self.max_entries}, flush_every={self.flush_every}"
        )

    @classmethod
    def from_policy(
        cls,
        config: PolicyConfig,
        store: Optional[SnapshotStore] = None,
        **kwargs
    ) -> 'ExpiringCache':
        """Build a cache sized by a PolicyConfig."""
        return cls(
            cache_duration=config.cache_duration,
            max_entries=config.max_entries,
            store=store,
            **kwargs
        )

    def load(self, now: Optional[float] = None) -> int:
        """
        Replace in-memory state with the persisted snapshot.

        Expired entries are dropped and the bound is enforced immediately.

        Args:
            now: Current epoch seconds (default: time.time())

        Returns:
            Number of live entries after loading
        """
        if now is None:
            now = time.time()
        now = int(now)

        entries = self.store.load() if self.store is not None else {}

        with self._lock:
            self._entries = dict(entries)
            self._remove_expired(now)
            self._evict_to(self.max_entries)
            self._last_cleanup = now
            count = len(self._entries)

        logger.info(f"Loaded dedup cache with {count} live entries")
        return count

    def check_and_mark(self, fingerprint: str, now: Optional[float] = None) -> CacheDecision:
        """
        Decide whether a fingerprint is novel and mark it if so.

        The lookup, window check and update run under one lock, so concurrent
        callers for the same fingerprint never both get NOVEL in one window.

        Args:
            fingerprint: Event fingerprint
            now: Current epoch seconds (default: time.time())

        Returns:
            CacheDecision.NOVEL if absent or expired, CacheDecision.SUPPRESS
            otherwise

        Examples:
            >>> cache = ExpiringCache(cache_duration=3600, max_entries=10)
            >>> cache.check_and_mark('fp', now=0)
            <CacheDecision.NOVEL: 'NOVEL'>
            >>> cache.check_and_mark('fp', now=1800)
            <CacheDecision.SUPPRESS: 'SUPPRESS'>
            >>> cache.check_and_mark('fp', now=3600)
            <CacheDecision.NOVEL: 'NOVEL'>
        """
        if now is None:
            now = time.time()
        now = int(now)

        with self._lock:
            self._cleanup_if_needed(now)

            last_seen = self._entries.get(fingerprint)
            if last_seen is not None and not self._is_expired(last_seen, now):
                return CacheDecision.SUPPRESS

            if last_seen is None and len(self._entries) >= self.max_entries:
                self._make_room(now)

            self._entries[fingerprint] = now
            self._pending_mutations += 1
            self._flush_if_needed()

        return CacheDecision.NOVEL

    def contains(self, fingerprint: str, now: Optional[float] = None) -> bool:
        """
        Check whether a fingerprint is inside its dedup window, without marking.

        Args:
            fingerprint: Event fingerprint
            now: Current epoch seconds (default: time.time())

        Returns:
            True if a non-expired entry exists
        """
        if now is None:
            now = time.time()
        with self._lock:
            last_seen = self._entries.get(fingerprint)
            return last_seen is not None and not self._is_expired(last_seen, int(now))

    def cleanup_expired(self, now: Optional[float] = None) -> int:
        """
        Remove expired entries.

        Cleanup changes only the physical state, so it does not schedule a
        snapshot write; expired entries in the snapshot are dropped on the
        next load.

        Args:
            now: Current epoch seconds (default: time.time())

        Returns:
            Number of entries removed
        """
        if now is None:
            now = time.time()
        with self._lock:
            removed = self._remove_expired(int(now))
            self._last_cleanup = now
        return removed

    def oldest_timestamp(self) -> Optional[int]:
        """Smallest last_seen currently held, or None when empty."""
        with self._lock:
            if not self._entries:
                return None
            return min(self._entries.values())

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current fingerprint -> last_seen mapping."""
        with self._lock:
            return dict(self._entries)

    def size(self) -> int:
        """
        Get current cache size.

        Returns:
            Number of entries in cache, including expired ones not yet cleaned
        """
        with self._lock:
            return len(self._entries)

    @property
    def pending_mutations(self) -> int:
        """Mutations not yet written to the snapshot."""
        return self._pending_mutations

    def flush(self) -> bool:
        """
        Write the current state to the snapshot store.

        The write happens under the cache lock, so snapshots land on disk in
        mutation order. On failure the mutations stay pending and the next
        flush retries.

        Returns:
            True if the snapshot was written (or there is no store)
        """
        if self.store is None:
            self._pending_mutations = 0
            return True

        with self._lock:
            try:
                self.store.save(self._entries)
            except PersistenceWriteError as e:
                log_persistence_failure(
                    logger, 'save', self.store.path, e, self._pending_mutations
                )
                return False
            self._pending_mutations = 0
            self._last_flush = time.time()
        return True

    def close(self) -> None:
        """Flush pending mutations; call at shutdown."""
        if self._pending_mutations:
            self.flush()

    def clear(self) -> None:
        """
        Clear all entries from cache.

        The empty state is persisted on the next flush.
        """
        with self._lock:
            if self._entries:
                self._entries.clear()
                self._pending_mutations += 1
        logger.info("Cache cleared")

    def _is_expired(self, last_seen: int, now: int) -> bool:
        return now - last_seen >= self.cache_duration

    def _cleanup_if_needed(self, now: int) -> None:
        """
        Perform opportunistic cleanup if interval has elapsed.

        Called from check_and_mark() with the lock held.
        """
        if (now - self._last_cleanup) >= self.cleanup_interval:
            self._remove_expired(now)
            self._last_cleanup = now

    def _remove_expired(self, now: int) -> int:
        expired_keys = [
            key for key, last_seen in self._entries.items()
            if self._is_expired(last_seen, now)
        ]

        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired entries")

        return len(expired_keys)

    def _make_room(self, now: int) -> None:
        """Free one slot for an insert: expired entries first, then oldest."""
        self._remove_expired(now)
        self._last_cleanup = now
        self._evict_to(self.max_entries - 1)

    def _evict_to(self, limit: int) -> None:
        evicted = len(self._entries) - limit
        if evicted <= 0:
            return

        if evicted == 1:
            victims = [min(self._entries, key=self._entries.__getitem__)]
        else:
            victims = sorted(self._entries, key=self._entries.__getitem__)[:evicted]

        for key in victims:
            del self._entries[key]

        logger.debug(
            f"Evicted {evicted} oldest entries to stay within "
            f"max_entries={self.max_entries}"
        )

    def _flush_if_needed(self) -> None:
        if self._pending_mutations >= self.flush_every:
            self.flush()
        elif self.flush_interval > 0 and (time.time() - self._last_flush) >= self.flush_interval:
            self.flush()
