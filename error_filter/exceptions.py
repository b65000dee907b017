"""
Custom exceptions for the error filter.

This module defines exception types for the failure scenarios of the
filter. None of them is ever allowed to escape into the host application:
they are raised at the point of failure and absorbed by the component that
owns the fallback (empty cache, dropped line, non-matching pattern).
"""


class ErrorFilterError(Exception):
    """
    Base exception for error filter failures.

    All filter-specific exceptions inherit from this base class, allowing
    the bootstrap code to catch every filter failure in one place.
    """
    pass


class ConfigurationError(ErrorFilterError):
    """
    Raised when configuration is invalid.

    This exception is raised when:
    - A numeric setting is not a number or is out of range
    - A pattern list is not a JSON array of strings
    - A pattern does not compile as a regular expression

    Attributes:
        message: Error message describing the configuration issue
        validation_errors: List of validation error messages

    Examples:
        >>> raise ConfigurationError(
        ...     "Invalid configuration",
        ...     validation_errors=["ERROR_FILTER_CACHE_DURATION must be at least 1"]
        ... )
    """

    def __init__(self, message: str, validation_errors: list = None):
        """
        Initialize ConfigurationError.

        Args:
            message: Error message
            validation_errors: List of validation error messages (optional)
        """
        super().__init__(message)
        self.validation_errors = validation_errors or []

    def __str__(self):
        """Return string representation with validation errors if available."""
        if self.validation_errors:
            errors_str = "; ".join(self.validation_errors)
            return f"{super().__str__()}: {errors_str}"
        return super().__str__()


class _FileOperationError(ErrorFilterError):
    """Common shape for errors tied to a file on disk."""

    def __init__(
        self,
        message: str,
        path: str = None,
        original_error: Exception = None
    ):
        super().__init__(message)
        self.path = path
        self.original_error = original_error

    def __str__(self):
        if self.path:
            return f"{self.path}: {super().__str__()}"
        return super().__str__()


class PersistenceReadError(_FileOperationError):
    """
    Raised when the cache snapshot cannot be read.

    This can occur due to:
    - Missing read permission on the snapshot file
    - Truncated or corrupt JSON
    - A snapshot whose top-level value is not an object

    The snapshot store catches this and starts with an empty cache.
    """
    pass


class PersistenceWriteError(_FileOperationError):
    """
    Raised when the cache snapshot cannot be written.

    The cache keeps serving from memory and retries on the next flush.
    """
    pass


class SinkWriteError(_FileOperationError):
    """
    Raised when a line cannot be appended to the destination log.

    The line is dropped; the host never sees this error.
    """
    pass
