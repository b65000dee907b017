"""
Classification and policy engine.

This module decides, before the cache is consulted, whether the filter
manages an event at all and whether a whitelist or blacklist pattern
settles its fate.
"""

import logging

from error_filter.models import DiagnosticEvent, PolicyConfig, PolicyDecision
from error_filter.utils.patterns import compile_patterns, first_match

logger = logging.getLogger(__name__)


class PolicyEngine:
    """
    Severity gate plus ordered whitelist/blacklist matching.

    Checks run in order and the first match wins:
    1. Severity not filtered -> not considered, PASS
    2. Whitelist match -> PASS (bypasses cache)
    3. Blacklist match -> SUPPRESS (never reaches cache)
    4. Otherwise -> DEFER to the cache

    Whitelist is checked before blacklist, so an event matching both is
    always logged.
    """

    def __init__(self, config: PolicyConfig):
        """
        Initialize policy engine.

        Patterns are compiled once here. Invalid patterns are logged and
        never match.

        Args:
            config: Immutable policy configuration
        """
        self.config = config
        self._whitelist = compile_patterns(config.whitelist_patterns)
        self._blacklist = compile_patterns(config.blacklist_patterns)

        logger.debug(
            f"PolicyEngine initialized: severities="
            f"{sorted(s.value for s in config.filtered_severities)}, "
            f"whitelist={len(self._whitelist)}, blacklist={len(self._blacklist)}"
        )

    def should_consider(self, event: DiagnosticEvent) -> bool:
        """
        Check whether the filter manages this event's severity.

        Args:
            event: Diagnostic event

        Returns:
            True if the severity is in the filtered set
        """
        return event.severity in self.config.filtered_severities

    def decision(self, event: DiagnosticEvent) -> PolicyDecision:
        """
        Apply severity gate, whitelist and blacklist in order.

        Args:
            event: Diagnostic event

        Returns:
            PolicyDecision.PASS, PolicyDecision.SUPPRESS, or
            PolicyDecision.DEFER when the cache must decide

        Examples:
            >>> engine = PolicyEngine(PolicyConfig(blacklist_patterns=('/deprecated/i',)))
            >>> engine.decision(DiagnosticEvent(Severity.WARNING, 'Foo deprecated', 'a.py', 1))
            <PolicyDecision.SUPPRESS: 'SUPPRESS'>
        """
        if not self.should_consider(event):
            return PolicyDecision.PASS

        if first_match(self._whitelist, event.message) is not None:
            return PolicyDecision.PASS

        if first_match(self._blacklist, event.message) is not None:
            return PolicyDecision.SUPPRESS

        return PolicyDecision.DEFER
