"""
Structured logging utilities for the error filter.

This module provides JSON-formatted logging for the filter's own debug
channel. The filter lives inside a host application, so configuration is
applied to the package logger only and never touches the root logger.
"""

import json
import logging
import sys
from datetime import datetime, timezone

PACKAGE_LOGGER_NAME = 'error_filter'


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON with consistent fields including:
    - timestamp: ISO 8601 timestamp
    - level: Log level (DEBUG, INFO, WARNING, ERROR)
    - component: Logger name
    - message: Log message
    - Additional fields from extra dict
    """

    # Standard LogRecord attributes that are not copied as extra fields
    SKIP_FIELDS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'message', 'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage()
        }

        for key, value in record.__dict__.items():
            if key not in self.SKIP_FIELDS and not key.startswith('_'):
                # Handle non-serializable types
                try:
                    json.dumps(value)
                    log_entry[key] = value
                except (TypeError, ValueError):
                    log_entry[key] = str(value)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        try:
            return json.dumps(log_entry)
        except (TypeError, ValueError) as e:
            return json.dumps({
                'error': f"Failed to serialize log: {e}",
                'message': record.getMessage()
            })


def configure_filter_logging(
    debug: bool = False,
    use_json: bool = True,
    stream=None
) -> logging.Logger:
    """
    Configure the filter's internal debug channel.

    Replaces handlers previously attached by this function and stops
    propagation, so filter diagnostics never loop back through the host's
    handlers (which may themselves carry a DuplicateRecordFilter).

    Args:
        debug: Log at DEBUG when True, WARNING otherwise
        use_json: Whether to use JSON formatting (default: True)
        stream: Output stream (default: sys.stderr)

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    for handler in package_logger.handlers[:]:
        if getattr(handler, '_error_filter_handler', False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler._error_filter_handler = True

    if use_json:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    package_logger.debug(
        f"Configured filter logging: debug={debug}, json={use_json}"
    )

    return package_logger


def log_event_decision(
    logger: logging.Logger,
    disposition: str,
    severity: str,
    fingerprint: str,
    source_location: str,
    line: int
) -> None:
    """
    Log the dispatcher's decision for one event with structured fields.

    Args:
        logger: Logger instance
        disposition: Disposition value
        severity: Event severity value
        fingerprint: Event fingerprint (may be empty when not computed)
        source_location: Event source location
        line: Event line number
    """
    logger.debug(
        f"Event {disposition.lower()}: {severity} at {source_location}:{line}",
        extra={
            'operation': 'dispatch',
            'disposition': disposition,
            'severity': severity,
            'fingerprint': fingerprint,
            'source_location': source_location,
            'line': line
        }
    )


def log_persistence_failure(
    logger: logging.Logger,
    operation: str,
    path: str,
    error: Exception,
    pending_mutations: int = 0
) -> None:
    """
    Log a snapshot read or write failure with structured fields.

    Args:
        logger: Logger instance
        operation: 'load' or 'save'
        path: Snapshot path
        error: The exception that was absorbed
        pending_mutations: Mutations still waiting to be persisted
    """
    logger.warning(
        f"Snapshot {operation} failed for {path}: {error}",
        extra={
            'operation': f"snapshot_{operation}",
            'path': path,
            'error_type': type(error).__name__,
            'pending_mutations': pending_mutations
        }
    )


def log_error(
    logger: logging.Logger,
    component: str,
    error_type: str,
    error_message: str,
    exc_info: bool = True
) -> None:
    """
    Log error with structured fields and context.

    Args:
        logger: Logger instance
        component: Component where error occurred
        error_type: Type of error
        error_message: Error message
        exc_info: Whether to include exception info
    """
    logger.error(
        f"{component} error: {error_message}",
        extra={
            'failed_component': component,
            'error_type': error_type,
            'error_message': error_message
        },
        exc_info=exc_info
    )
