"""
Cache statistics data model.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CacheStats:
    """
    Read-only summary of the dedup cache.

    Attributes:
        entry_count: Number of non-expired cached fingerprints
        storage_size_bytes: Size of the snapshot file (0 when missing)
        oldest_entry_timestamp: Smallest last_seen, or None when empty
    """

    entry_count: int
    storage_size_bytes: int
    oldest_entry_timestamp: Optional[int] = None

    def oldest_entry_display(self) -> str:
        """Oldest entry as local 'YYYY-MM-DD HH:MM:SS', or 'None'."""
        if self.oldest_entry_timestamp is None:
            return 'None'
        return datetime.fromtimestamp(self.oldest_entry_timestamp).strftime(
            '%Y-%m-%d %H:%M:%S'
        )

    def to_dict(self) -> dict:
        return {
            'entry_count': self.entry_count,
            'storage_size_bytes': self.storage_size_bytes,
            'oldest_entry_timestamp': self.oldest_entry_timestamp,
        }
