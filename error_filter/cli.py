#!/usr/bin/env python3
"""
Command-line statistics for the error filter cache.

Usage:
    error-filter-stats                          # Use ERROR_FILTER_* settings
    error-filter-stats --cache-file cache.json  # Inspect a specific snapshot
    error-filter-stats --json                   # Machine-readable output
"""

import argparse
import json
import sys

from error_filter.config.settings import Settings
from error_filter.exceptions import ConfigurationError
from error_filter.services.expiring_cache import ExpiringCache
from error_filter.services.snapshot_store import SnapshotStore
from error_filter.services.stats_reporter import StatsReporter


def build_reporter(cache_file: str, cache_duration: int, max_entries: int) -> StatsReporter:
    """
    Build a read-only reporter over a snapshot file.

    Args:
        cache_file: Snapshot path
        cache_duration: Dedup window in seconds
        max_entries: Cache bound

    Returns:
        StatsReporter over a freshly loaded cache
    """
    store = SnapshotStore(cache_file)
    cache = ExpiringCache(cache_duration=cache_duration, max_entries=max_entries, store=store)
    cache.load()
    return StatsReporter(cache, store)


def print_stats(stats, as_json: bool = False) -> None:
    """Print stats in text or JSON form."""
    if as_json:
        print(json.dumps(stats.to_dict()))
        return

    print("✓ Error Filter Statistics:")
    print(f"  Cached Messages: {stats.entry_count}")
    print(f"  Cache File Size: {stats.storage_size_bytes} bytes")
    print(f"  Oldest Cache Entry: {stats.oldest_entry_display()}")


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Show error filter dedup cache statistics'
    )
    parser.add_argument(
        '--cache-file',
        help='Snapshot file (default: ERROR_FILTER_CACHE_FILE)'
    )
    parser.add_argument(
        '--cache-duration',
        type=int,
        help='Dedup window in seconds (default: ERROR_FILTER_CACHE_DURATION)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print stats as JSON'
    )

    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cache_duration = settings.cache_duration
    if args.cache_duration is not None:
        cache_duration = args.cache_duration
    if cache_duration < 1:
        print(f"Error: --cache-duration must be at least 1, got {cache_duration}", file=sys.stderr)
        return 1

    reporter = build_reporter(
        args.cache_file or settings.cache_file,
        cache_duration,
        settings.max_cache_entries
    )
    print_stats(reporter.stats(), as_json=args.json)
    return 0


if __name__ == '__main__':
    sys.exit(main())
