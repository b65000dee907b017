"""
Interception of Python warnings.

Installs a replacement for warnings.showwarning that routes each warning
through the dispatcher before the previous handler sees it. Warnings the
filter handles (logged once or suppressed as repeats) never reach the
previous handler; everything else does.
"""

import logging
import sys
import warnings
from typing import Callable, Optional

from error_filter.models import DiagnosticEvent, Severity
from error_filter.services.event_dispatcher import EventDispatcher
from error_filter.utils.structured_logger import log_error

logger = logging.getLogger(__name__)

# Checked in order; subclasses must come before their bases
CATEGORY_SEVERITIES = (
    (FutureWarning, Severity.USER_DEPRECATED),
    (DeprecationWarning, Severity.DEPRECATED),
    (PendingDeprecationWarning, Severity.DEPRECATED),
    (SyntaxWarning, Severity.PARSE),
    (ImportWarning, Severity.NOTICE),
    (ResourceWarning, Severity.NOTICE),
    (UserWarning, Severity.USER_WARNING),
)


def severity_for_category(category) -> Severity:
    """
    Map a warning category to a severity.

    Args:
        category: Warning class

    Returns:
        Severity for the category, WARNING for anything unmapped
    """
    for warning_class, severity in CATEGORY_SEVERITIES:
        try:
            if issubclass(category, warning_class):
                return severity
        except TypeError:
            break
    return Severity.WARNING


class WarningsHook:
    """
    Replacement for warnings.showwarning backed by an EventDispatcher.

    Use install()/uninstall() to swap the module-level handler; the hook
    restores exactly what it replaced.
    """

    def __init__(self, dispatcher: EventDispatcher, clock: Callable[[], float] = None):
        """
        Initialize warnings hook.

        Args:
            dispatcher: Dispatcher that decides per warning
            clock: Source of event timestamps (default: time.time)
        """
        self.dispatcher = dispatcher
        self.clock = clock
        self._previous: Optional[Callable] = None
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """Route warnings.showwarning through this hook."""
        if self._installed:
            return
        self._previous = warnings.showwarning
        warnings.showwarning = self.showwarning
        self._installed = True
        logger.debug("Warnings hook installed")

    def uninstall(self) -> None:
        """Restore the handler that was active at install() time."""
        if not self._installed:
            return
        # Only restore if nobody replaced us in the meantime
        if warnings.showwarning == self.showwarning:
            warnings.showwarning = self._previous
        self._installed = False
        logger.debug("Warnings hook uninstalled")

    def showwarning(self, message, category, filename, lineno, file=None, line=None):
        """
        warnings.showwarning-compatible entry point.

        Falls through to the previous handler when the dispatcher does not
        handle the warning or when building the event fails.
        """
        handled = False
        try:
            event = self.to_event(message, category, filename, lineno)
            handled = self.dispatcher.handle(event)
        except Exception as e:
            log_error(logger, 'warnings_hook', type(e).__name__, str(e))

        if not handled:
            self._show_default(message, category, filename, lineno, file, line)

    def to_event(self, message, category, filename, lineno) -> DiagnosticEvent:
        """Build a DiagnosticEvent from showwarning arguments."""
        kwargs = {}
        if self.clock is not None:
            kwargs['timestamp'] = self.clock()
        return DiagnosticEvent(
            severity=severity_for_category(category),
            message=str(message),
            source_location=filename or '',
            line=lineno or 0,
            **kwargs
        )

    def _show_default(self, message, category, filename, lineno, file, line):
        if self._previous is not None:
            self._previous(message, category, filename, lineno, file, line)
            return

        target = file if file is not None else sys.stderr
        if target is None:
            return
        try:
            target.write(warnings.formatwarning(message, category, filename, lineno, line))
        except OSError:
            pass
