"""
Unit tests for PolicyEngine.
"""

import pytest

from error_filter.models import DiagnosticEvent, PolicyConfig, PolicyDecision, Severity
from error_filter.services import PolicyEngine


def make_event(message='X', severity=Severity.WARNING):
    return DiagnosticEvent(severity, message, 'a.py', 10, timestamp=0)


class TestPolicyEngine:
    """Test suite for PolicyEngine decisions."""

    def test_unlisted_filtered_event_defers_to_cache(self, default_policy):
        engine = PolicyEngine(default_policy)
        assert engine.decision(make_event()) is PolicyDecision.DEFER

    @pytest.mark.parametrize('severity', [
        Severity.ERROR,
        Severity.FATAL,
        Severity.PARSE,
    ])
    def test_unfiltered_severity_passes(self, default_policy, severity):
        engine = PolicyEngine(default_policy)
        event = make_event(severity=severity)

        assert not engine.should_consider(event)
        assert engine.decision(event) is PolicyDecision.PASS

    def test_disabled_severity_class_passes(self):
        config = PolicyConfig(filtered_severities={Severity.WARNING})
        engine = PolicyEngine(config)

        assert engine.decision(make_event(severity=Severity.NOTICE)) is PolicyDecision.PASS
        assert engine.decision(make_event(severity=Severity.WARNING)) is PolicyDecision.DEFER

    def test_whitelist_match_passes(self):
        engine = PolicyEngine(PolicyConfig(whitelist_patterns=('/Parse error/',)))
        assert engine.decision(make_event('Parse error: bad token')) is PolicyDecision.PASS

    def test_blacklist_match_suppresses(self):
        engine = PolicyEngine(PolicyConfig(blacklist_patterns=('/deprecated/i',)))
        event = make_event('Function foo is Deprecated', Severity.DEPRECATED)

        assert engine.decision(event) is PolicyDecision.SUPPRESS

    def test_whitelist_wins_over_blacklist(self):
        config = PolicyConfig(
            whitelist_patterns=('/important/',),
            blacklist_patterns=('/important/',)
        )
        engine = PolicyEngine(config)

        assert engine.decision(make_event('important thing')) is PolicyDecision.PASS

    def test_patterns_ignored_for_unfiltered_severity(self):
        """Test the severity gate runs before pattern matching."""
        engine = PolicyEngine(PolicyConfig(blacklist_patterns=('/X/',)))
        assert engine.decision(make_event('X', Severity.ERROR)) is PolicyDecision.PASS

    def test_invalid_pattern_is_skipped(self):
        config = PolicyConfig(blacklist_patterns=('([broken', '/noise/'))
        engine = PolicyEngine(config)

        assert engine.decision(make_event('([broken')) is PolicyDecision.DEFER
        assert engine.decision(make_event('some noise here')) is PolicyDecision.SUPPRESS
