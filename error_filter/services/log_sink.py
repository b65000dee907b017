"""
Log sink for accepted diagnostic events.

This module formats accepted events as single log lines and appends them to
the destination log. A write failure drops the line; it never propagates
into the host.
"""

import logging
import os
import threading
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

from error_filter.exceptions import SinkWriteError
from error_filter.models import DiagnosticEvent, severity_label

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%d-%b-%Y %H:%M:%S %Z'


def format_event_line(event: DiagnosticEvent, tz: Optional[tzinfo] = None) -> str:
    """
    Format an event as one destination log line.

    Format: [<d-Mon-YYYY HH:MM:SS TZ>] <Label>: <message> in <source> on line <n>

    Args:
        event: Diagnostic event
        tz: Timezone for the timestamp (default: UTC)

    Returns:
        Formatted line including the trailing newline

    Examples:
        >>> event = DiagnosticEvent(Severity.WARNING, 'X', 'a.py', 10, timestamp=0)
        >>> format_event_line(event)
        '[01-Jan-1970 00:00:00 UTC] Warning: X in a.py on line 10\\n'
    """
    moment = datetime.fromtimestamp(event.timestamp, tz or dt_timezone.utc)
    return (
        f"[{moment.strftime(TIMESTAMP_FORMAT)}] "
        f"{severity_label(event.severity)}: {event.message} "
        f"in {event.source_location} on line {event.line}\n"
    )


class LogSink:
    """
    Append-only writer for the destination log.

    Lines are appended under a lock so concurrent threads never interleave
    partial lines. The file is never truncated or rewritten.

    Attributes:
        path: Absolute path of the destination log
        enabled: When False, emit() drops lines without touching the file
        timezone: Timezone used for line timestamps
    """

    def __init__(self, path: str, enabled: bool = True, timezone: Optional[tzinfo] = None):
        """
        Initialize log sink.

        Args:
            path: Destination log path
            enabled: Write lines when True (default: True)
            timezone: Timezone for formatted timestamps (default: UTC)
        """
        self.path = os.path.abspath(path)
        self.enabled = enabled
        self.timezone = timezone or dt_timezone.utc
        self.written_count = 0
        self.dropped_count = 0
        self._lock = threading.Lock()

    def emit_event(self, event: DiagnosticEvent) -> bool:
        """Format and append an event."""
        return self.emit(format_event_line(event, self.timezone))

    def emit(self, formatted_line: str) -> bool:
        """
        Append a formatted line.

        Args:
            formatted_line: Line to append (newline added if missing)

        Returns:
            True if the line was written, False if dropped
        """
        if not self.enabled:
            return False

        if not formatted_line.endswith('\n'):
            formatted_line += '\n'

        try:
            self._append(formatted_line)
        except SinkWriteError as e:
            self.dropped_count += 1
            logger.warning(f"Dropped log line: {e}", extra={'operation': 'sink_write'})
            return False

        self.written_count += 1
        return True

    def _append(self, line: str) -> None:
        try:
            with self._lock:
                directory = os.path.dirname(self.path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(self.path, 'a', encoding='utf-8', errors='backslashreplace') as f:
                    f.write(line)
        except (OSError, UnicodeError) as e:
            raise SinkWriteError(
                "Unable to append to destination log",
                path=self.path,
                original_error=e
            ) from e
