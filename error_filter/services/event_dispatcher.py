"""
Event dispatcher.

This module is the single entry point host adapters call for each
diagnostic event. It feeds the event through the policy engine, the cache
and the sink, and tells the caller whether the host's default handling
should still run.
"""

import logging
from typing import Optional

from error_filter.models import (
    CacheDecision,
    DiagnosticEvent,
    Disposition,
    PolicyDecision,
    UNCOVERABLE_SEVERITIES
)
from error_filter.services.expiring_cache import ExpiringCache
from error_filter.services.log_sink import LogSink
from error_filter.services.policy_engine import PolicyEngine
from error_filter.utils.fingerprinting import event_fingerprint
from error_filter.utils.structured_logger import log_error, log_event_decision

logger = logging.getLogger(__name__)


class EventDispatcher:
    """
    Policy -> Cache -> Sink pipeline for one event at a time.

    The dispatcher is a blocking, in-line gate: the decision is made before
    the host proceeds. Counters are informational and not synchronized.
    """

    def __init__(
        self,
        policy: PolicyEngine,
        cache: ExpiringCache,
        sink: Optional[LogSink] = None
    ):
        """
        Initialize event dispatcher.

        Args:
            policy: Policy engine
            cache: Dedup cache
            sink: Destination log (None when the host's own handler writes)
        """
        self.policy = policy
        self.cache = cache
        self.sink = sink
        self.counts = {disposition: 0 for disposition in Disposition}

    def classify(self, event: DiagnosticEvent) -> Disposition:
        """
        Decide what happens to an event, marking the cache when novel.

        Does not write to the sink.

        Args:
            event: Diagnostic event

        Returns:
            Disposition of the event
        """
        if event.severity in UNCOVERABLE_SEVERITIES:
            return self._record(event, Disposition.IGNORED)

        decision = self.policy.decision(event)

        if decision is PolicyDecision.PASS:
            if not self.policy.should_consider(event):
                return self._record(event, Disposition.IGNORED)
            return self._record(event, Disposition.PASSED)

        if decision is PolicyDecision.SUPPRESS:
            return self._record(event, Disposition.SUPPRESSED)

        key = event_fingerprint(event)
        if self.cache.check_and_mark(key, event.timestamp) is CacheDecision.NOVEL:
            return self._record(event, Disposition.NOVEL, key)
        return self._record(event, Disposition.SUPPRESSED, key)

    def dispatch(self, event: DiagnosticEvent) -> Disposition:
        """
        Classify an event and write novel events to the sink.

        Args:
            event: Diagnostic event

        Returns:
            Disposition of the event
        """
        disposition = self.classify(event)
        if disposition is Disposition.NOVEL and self.sink is not None:
            self.sink.emit_event(event)
        return disposition

    def handle(self, event: DiagnosticEvent) -> bool:
        """
        Host-facing entry point that never raises.

        Any unexpected failure fails open: the event is reported as not
        handled so the host's default handling runs.

        Args:
            event: Diagnostic event

        Returns:
            True if handled (suppress the host default), False otherwise
        """
        try:
            return self.dispatch(event).handled
        except Exception as e:
            log_error(logger, 'dispatcher', type(e).__name__, str(e))
            return False

    def _record(
        self,
        event: DiagnosticEvent,
        disposition: Disposition,
        key: str = ''
    ) -> Disposition:
        self.counts[disposition] += 1
        if logger.isEnabledFor(logging.DEBUG):
            log_event_decision(
                logger,
                disposition.value,
                getattr(event.severity, 'value', str(event.severity)),
                key,
                event.source_location,
                event.line
            )
        return disposition
