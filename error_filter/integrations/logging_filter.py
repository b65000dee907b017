"""
Duplicate suppression for the logging package.

Provides a logging.Filter that drops records the dispatcher classifies as
repeats inside the dedup window (or blacklisted). The handler the filter is
attached to remains the destination, so the dispatcher is only asked to
classify, never to write.
"""

import logging

from error_filter.models import DiagnosticEvent, Disposition, Severity
from error_filter.services.event_dispatcher import EventDispatcher
from error_filter.utils.structured_logger import PACKAGE_LOGGER_NAME, log_error

logger = logging.getLogger(__name__)


def severity_for_level(levelno: int) -> Severity:
    """
    Map a logging level to a severity.

    Args:
        levelno: Numeric logging level

    Returns:
        NOTICE below WARNING, WARNING, ERROR, or FATAL from CRITICAL up
    """
    if levelno >= logging.CRITICAL:
        return Severity.FATAL
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    return Severity.NOTICE


class DuplicateRecordFilter(logging.Filter):
    """
    logging.Filter that suppresses repeated records.

    Records from the error_filter logger namespace are always let through
    unclassified, so the filter's own diagnostics can never feed back into
    the cache.
    """

    def __init__(self, dispatcher: EventDispatcher, name: str = ''):
        """
        Initialize duplicate record filter.

        Args:
            dispatcher: Dispatcher that classifies records
            name: logging.Filter name restriction (default: all loggers)
        """
        super().__init__(name)
        self.dispatcher = dispatcher

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False

        if record.name == PACKAGE_LOGGER_NAME or record.name.startswith(PACKAGE_LOGGER_NAME + '.'):
            return True

        try:
            disposition = self.dispatcher.classify(self.to_event(record))
        except Exception as e:
            log_error(logger, 'logging_filter', type(e).__name__, str(e))
            return True

        return disposition is not Disposition.SUPPRESSED

    @staticmethod
    def to_event(record: logging.LogRecord) -> DiagnosticEvent:
        """Build a DiagnosticEvent from a log record."""
        return DiagnosticEvent(
            severity=severity_for_level(record.levelno),
            message=record.getMessage(),
            source_location=record.pathname or record.name,
            line=record.lineno or 0,
            timestamp=record.created
        )
