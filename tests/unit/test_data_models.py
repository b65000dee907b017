"""
Unit tests for error filter data models.
"""

from datetime import datetime

import pytest

from error_filter.models import (
    CacheStats,
    DiagnosticEvent,
    Disposition,
    PolicyConfig,
    Severity,
    UNCOVERABLE_SEVERITIES,
    severities_for_toggles,
    severity_label
)


class TestSeverity:
    """Test suite for severity helpers."""

    def test_labels(self):
        assert severity_label(Severity.FATAL) == 'Fatal Error'
        assert severity_label(Severity.PARSE) == 'Parse Error'
        assert severity_label(Severity.USER_DEPRECATED) == 'User Deprecated'

    def test_label_accepts_raw_value(self):
        assert severity_label('NOTICE') == 'Notice'

    @pytest.mark.parametrize('value', ['E_STRANGE', None, 42])
    def test_unknown_label(self, value):
        assert severity_label(value) == 'Unknown Error'

    def test_toggles_all_on(self):
        assert severities_for_toggles(True, True, True) == frozenset({
            Severity.NOTICE, Severity.USER_NOTICE,
            Severity.WARNING, Severity.USER_WARNING,
            Severity.DEPRECATED, Severity.USER_DEPRECATED,
        })

    def test_toggles_partial(self):
        assert severities_for_toggles(False, True, False) == frozenset({
            Severity.WARNING, Severity.USER_WARNING
        })

    def test_toggles_all_off(self):
        assert severities_for_toggles(False, False, False) == frozenset()


class TestDiagnosticEvent:
    """Test suite for DiagnosticEvent."""

    def test_valid_event(self):
        event = DiagnosticEvent(Severity.WARNING, 'X', 'a.py', 10, timestamp=5)
        assert event.line == 10
        assert event.timestamp == 5

    def test_default_timestamp_is_now(self):
        event = DiagnosticEvent(Severity.WARNING, 'X', 'a.py', 10)
        assert event.timestamp > 0

    def test_fields_coerced(self):
        event = DiagnosticEvent(Severity.NOTICE, ValueError('boom'), None, None, timestamp=0)

        assert event.message == 'boom'
        assert event.source_location == ''
        assert event.line == 0

    def test_negative_line_rejected(self):
        with pytest.raises(ValueError, match='line'):
            DiagnosticEvent(Severity.WARNING, 'X', 'a.py', -1)

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError, match='timestamp'):
            DiagnosticEvent(Severity.WARNING, 'X', 'a.py', 1, timestamp=-5)


class TestPolicyConfig:
    """Test suite for PolicyConfig."""

    def test_defaults(self):
        config = PolicyConfig()

        assert config.cache_duration == 86400
        assert config.max_entries == 1000
        assert config.whitelist_patterns == ()
        assert config.blacklist_patterns == ()
        assert Severity.WARNING in config.filtered_severities
        assert Severity.ERROR not in config.filtered_severities

    def test_uncoverable_severities_removed(self):
        config = PolicyConfig(filtered_severities={Severity.FATAL, Severity.PARSE, Severity.NOTICE})

        assert config.filtered_severities == frozenset({Severity.NOTICE})
        assert not (config.filtered_severities & UNCOVERABLE_SEVERITIES)

    def test_patterns_normalized_to_tuples(self):
        config = PolicyConfig(whitelist_patterns=['/a/'], blacklist_patterns=['/b/'])

        assert config.whitelist_patterns == ('/a/',)
        assert config.blacklist_patterns == ('/b/',)

    def test_raw_severity_values_accepted(self):
        config = PolicyConfig(filtered_severities={'WARNING'})
        assert config.filtered_severities == frozenset({Severity.WARNING})

    @pytest.mark.parametrize('kwargs', [
        {'cache_duration': 0},
        {'cache_duration': -10},
        {'max_entries': 0},
    ])
    def test_invalid_ranges(self, kwargs):
        with pytest.raises(ValueError):
            PolicyConfig(**kwargs)

    def test_immutable(self):
        config = PolicyConfig()
        with pytest.raises(AttributeError):
            config.cache_duration = 5


class TestDisposition:
    """Test suite for Disposition."""

    def test_handled(self):
        assert Disposition.NOVEL.handled
        assert Disposition.SUPPRESSED.handled
        assert not Disposition.PASSED.handled
        assert not Disposition.IGNORED.handled


class TestCacheStats:
    """Test suite for CacheStats."""

    def test_empty_display(self):
        assert CacheStats(0, 0).oldest_entry_display() == 'None'

    def test_oldest_display_uses_local_time(self):
        stats = CacheStats(1, 40, oldest_entry_timestamp=1700000000)
        expected = datetime.fromtimestamp(1700000000).strftime('%Y-%m-%d %H:%M:%S')

        assert stats.oldest_entry_display() == expected

    def test_to_dict(self):
        assert CacheStats(2, 80, 100).to_dict() == {
            'entry_count': 2,
            'storage_size_bytes': 80,
            'oldest_entry_timestamp': 100,
        }
