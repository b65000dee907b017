"""
Unit tests for whitelist/blacklist pattern compilation.
"""

import re

import pytest

from error_filter.exceptions import ConfigurationError
from error_filter.utils import compile_pattern, compile_patterns, first_match, split_delimited


class TestSplitDelimited:
    """Test suite for split_delimited()."""

    def test_plain_pattern_unchanged(self):
        assert split_delimited('Fatal error') == ('Fatal error', 0)

    def test_slash_delimited_without_flags(self):
        assert split_delimited('/Parse error/') == ('Parse error', 0)

    def test_slash_delimited_with_case_flag(self):
        body, flags = split_delimited('/deprecated/i')
        assert body == 'deprecated'
        assert flags & re.IGNORECASE

    def test_multiple_flags(self):
        body, flags = split_delimited('#a.b#is')
        assert body == 'a.b'
        assert flags & re.IGNORECASE
        assert flags & re.DOTALL

    def test_unknown_flag_letters_leave_pattern_plain(self):
        """Test a trailing segment that is not all flags is not treated as flags."""
        assert split_delimited('/usr/local') == ('/usr/local', 0)

    def test_lone_delimiter(self):
        assert split_delimited('/') == ('/', 0)


class TestCompilePattern:
    """Test suite for compile_pattern()."""

    def test_compiles_delimited_pattern(self):
        regex = compile_pattern('/Translation loading for the.*domain/')
        assert regex.search("Translation loading for the foo domain was triggered")

    def test_invalid_pattern_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            compile_pattern('/([unclosed/')
        assert exc_info.value.validation_errors

    def test_non_string_pattern_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            compile_pattern(42)


class TestCompilePatterns:
    """Test suite for compile_patterns() and first_match()."""

    def test_invalid_entries_become_none_and_keep_order(self):
        compiled = compile_patterns(['/ok/', '([bad', 'also ok'])

        assert len(compiled) == 3
        assert compiled[0] is not None
        assert compiled[1] is None
        assert compiled[2] is not None

    def test_invalid_pattern_never_matches(self):
        compiled = compile_patterns(['([bad'])
        assert first_match(compiled, '([bad') is None

    def test_first_match_returns_first_in_order(self):
        compiled = compile_patterns(['/foo/', '/foo bar/'])
        assert first_match(compiled, 'foo bar') is compiled[0]

    def test_search_semantics(self):
        """Test patterns match anywhere in the text, not only at the start."""
        compiled = compile_patterns(['/undefined function/'])
        assert first_match(compiled, 'Call to undefined function foo()') is not None

    def test_no_match(self):
        compiled = compile_patterns(['/foo/'])
        assert first_match(compiled, 'bar') is None

    def test_empty_list(self):
        assert first_match(compile_patterns([]), 'anything') is None
