"""
Snapshot store for persisting the dedup cache.

The snapshot is a JSON object mapping fingerprint hex strings to integer
epoch seconds. Reads fall back to an empty mapping on any failure; writes
go to a temporary file in the target directory and are swapped into place
with os.replace(), so a concurrent reader sees either the old or the new
snapshot, never a partial one.
"""

import json
import logging
import math
import os
import tempfile
from typing import Dict

from error_filter.exceptions import PersistenceReadError, PersistenceWriteError
from error_filter.utils.structured_logger import log_persistence_failure

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    File-backed storage for the fingerprint -> last_seen mapping.

    Attributes:
        path: Absolute path of the snapshot file
    """

    def __init__(self, path: str):
        """
        Initialize snapshot store.

        Args:
            path: Snapshot file path (relative paths resolve against cwd)
        """
        self.path = os.path.abspath(path)

    def load(self) -> Dict[str, int]:
        """
        Load the snapshot.

        Missing files yield an empty mapping silently; unreadable or corrupt
        files are logged and also yield an empty mapping.

        Returns:
            Mapping of fingerprint to last_seen epoch seconds
        """
        if not os.path.exists(self.path):
            logger.debug(f"No snapshot at {self.path}, starting empty")
            return {}

        try:
            return self.read()
        except PersistenceReadError as e:
            log_persistence_failure(logger, 'load', self.path, e)
            return {}

    def read(self) -> Dict[str, int]:
        """
        Read and validate the snapshot.

        Entries whose value is not a finite number are skipped.

        Returns:
            Mapping of fingerprint to last_seen epoch seconds

        Raises:
            PersistenceReadError: If the file cannot be read or parsed
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceReadError(
                "Unable to read snapshot",
                path=self.path,
                original_error=e
            ) from e

        if not isinstance(raw, dict):
            raise PersistenceReadError(
                f"Snapshot must be a JSON object, got {type(raw).__name__}",
                path=self.path
            )

        entries = {}
        skipped = 0
        for key, value in raw.items():
            # bool is an int subclass but never a valid timestamp
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                skipped += 1
                continue
            # json accepts Infinity, NaN and overflowing literals like 1e999
            if isinstance(value, float) and not math.isfinite(value):
                skipped += 1
                continue
            entries[key] = int(value)

        if skipped:
            logger.warning(f"Skipped {skipped} malformed snapshot entries in {self.path}")

        logger.debug(f"Loaded {len(entries)} entries from {self.path}")
        return entries

    def save(self, entries: Dict[str, int]) -> None:
        """
        Atomically replace the snapshot.

        Args:
            entries: Mapping of fingerprint to last_seen epoch seconds

        Raises:
            PersistenceWriteError: If the snapshot cannot be written
        """
        directory = os.path.dirname(self.path)
        tmp_path = None

        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix='.' + os.path.basename(self.path) + '.',
                suffix='.tmp',
                dir=directory
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump({k: int(v) for k, v in entries.items()}, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistenceWriteError(
                "Unable to write snapshot",
                path=self.path,
                original_error=e
            ) from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass

        logger.debug(f"Saved {len(entries)} entries to {self.path}")

    def size_bytes(self) -> int:
        """
        Get the snapshot file size.

        Returns:
            Size in bytes, or 0 if the file does not exist
        """
        try:
            return os.path.getsize(self.path)
        except OSError:
            return 0
