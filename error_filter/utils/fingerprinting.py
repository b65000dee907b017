"""
Fingerprint utilities for deduplication.

This module derives the identity key the dedup cache is indexed by. The
key must be stable across process restarts because it is persisted.
"""

import hashlib
import json


def fingerprint(message: str, source_location: str, line: int) -> str:
    """
    Generate the SHA-256 fingerprint of a diagnostic event.

    The three fields are encoded as a JSON array before hashing, so field
    boundaries are unambiguous: ("ab", "c") and ("a", "bc") produce
    different keys.

    Args:
        message: Diagnostic message text
        source_location: File that raised the diagnostic
        line: Line number within source_location

    Returns:
        Hexadecimal SHA-256 hash string (64 characters)

    Examples:
        >>> fingerprint("X", "a.py", 10) == fingerprint("X", "a.py", 10)
        True
        >>> fingerprint("a", "bc", 1) == fingerprint("ab", "c", 1)
        False
    """
    payload = json.dumps(
        [str(message), str(source_location), int(line)],
        ensure_ascii=False,
        separators=(',', ':')
    )

    # Non-UTF-8 file names arrive surrogate-escaped on POSIX
    hash_obj = hashlib.sha256(payload.encode('utf-8', errors='surrogatepass'))

    return hash_obj.hexdigest()


def event_fingerprint(event) -> str:
    """Fingerprint of a DiagnosticEvent."""
    return fingerprint(event.message, event.source_location, event.line)
