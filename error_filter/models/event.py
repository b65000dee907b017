"""
Diagnostic event data model.

This module defines the dataclass for a single diagnostic event handed to
the filter by the host. Events are transient and never persisted; only
their fingerprint ends up in the cache.
"""

import time
from dataclasses import dataclass, field

from .severity import Severity


@dataclass
class DiagnosticEvent:
    """
    A diagnostic event emitted by the host.

    Attributes:
        severity: Severity of the event
        message: Diagnostic message text
        source_location: File (or module path) that raised the diagnostic
        line: Line number within source_location
        timestamp: Unix timestamp when the event was raised (default: now)
    """

    severity: Severity
    message: str
    source_location: str
    line: int
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        """Validate field constraints."""
        if not isinstance(self.message, str):
            self.message = str(self.message)

        if self.source_location is None:
            self.source_location = ''
        elif not isinstance(self.source_location, str):
            self.source_location = str(self.source_location)

        self.line = int(self.line or 0)
        if self.line < 0:
            raise ValueError(f"line must be non-negative, got {self.line}")

        if self.timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {self.timestamp}")
