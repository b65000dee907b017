"""
Unit tests for the warnings integration.
"""

import io
import warnings
from unittest.mock import Mock

import pytest

from error_filter.integrations import WarningsHook, severity_for_category
from error_filter.models import Severity


class TestSeverityForCategory:
    """Test suite for severity_for_category()."""

    @pytest.mark.parametrize('category,expected', [
        (DeprecationWarning, Severity.DEPRECATED),
        (PendingDeprecationWarning, Severity.DEPRECATED),
        (FutureWarning, Severity.USER_DEPRECATED),
        (SyntaxWarning, Severity.PARSE),
        (ImportWarning, Severity.NOTICE),
        (ResourceWarning, Severity.NOTICE),
        (UserWarning, Severity.USER_WARNING),
        (RuntimeWarning, Severity.WARNING),
        (Warning, Severity.WARNING),
    ])
    def test_mapping(self, category, expected):
        assert severity_for_category(category) is expected

    def test_subclass_uses_base_mapping(self):
        class LibraryDeprecation(DeprecationWarning):
            pass

        assert severity_for_category(LibraryDeprecation) is Severity.DEPRECATED

    def test_non_class_defaults_to_warning(self):
        assert severity_for_category('not a class') is Severity.WARNING


class TestWarningsHook:
    """Test suite for WarningsHook."""

    def test_install_and_uninstall(self):
        original = warnings.showwarning
        hook = WarningsHook(Mock())

        hook.install()
        assert hook.installed
        assert warnings.showwarning == hook.showwarning

        hook.uninstall()
        assert not hook.installed
        assert warnings.showwarning is original

    def test_install_is_idempotent(self):
        original = warnings.showwarning
        hook = WarningsHook(Mock())

        hook.install()
        hook.install()
        hook.uninstall()

        assert warnings.showwarning is original

    def test_uninstall_leaves_later_replacement(self):
        hook = WarningsHook(Mock())
        hook.install()
        replacement = Mock()
        warnings.showwarning = replacement

        hook.uninstall()

        assert warnings.showwarning is replacement

    def test_handled_warning_not_shown(self):
        dispatcher = Mock()
        dispatcher.handle.return_value = True
        hook = WarningsHook(dispatcher, clock=lambda: 100.0)
        out = io.StringIO()

        hook.showwarning('Foo is deprecated', DeprecationWarning, 'mod.py', 7, file=out)

        event = dispatcher.handle.call_args[0][0]
        assert event.severity is Severity.DEPRECATED
        assert event.message == 'Foo is deprecated'
        assert event.source_location == 'mod.py'
        assert event.line == 7
        assert event.timestamp == 100.0
        assert out.getvalue() == ''

    def test_unhandled_warning_shown(self):
        dispatcher = Mock()
        dispatcher.handle.return_value = False
        hook = WarningsHook(dispatcher)
        out = io.StringIO()

        hook.showwarning('careful', UserWarning, 'mod.py', 3, file=out)

        assert 'mod.py:3: UserWarning: careful' in out.getvalue()

    def test_unhandled_warning_goes_to_previous_handler(self):
        dispatcher = Mock()
        dispatcher.handle.return_value = False
        previous = Mock()
        warnings.showwarning = previous
        hook = WarningsHook(dispatcher)
        hook.install()

        hook.showwarning('careful', UserWarning, 'mod.py', 3)

        previous.assert_called_once_with('careful', UserWarning, 'mod.py', 3, None, None)

    def test_dispatcher_failure_falls_through(self):
        dispatcher = Mock()
        dispatcher.handle.side_effect = RuntimeError("boom")
        hook = WarningsHook(dispatcher)
        out = io.StringIO()

        hook.showwarning('careful', UserWarning, 'mod.py', 3, file=out)

        assert 'careful' in out.getvalue()

    def test_warning_instance_message(self):
        dispatcher = Mock()
        dispatcher.handle.return_value = True
        hook = WarningsHook(dispatcher)

        hook.showwarning(UserWarning('from instance'), UserWarning, 'mod.py', 1)

        assert dispatcher.handle.call_args[0][0].message == 'from instance'

    def test_end_to_end_with_dispatcher(self, make_dispatcher, log_path):
        """Test repeated warnings.warn calls are logged once."""
        hook = WarningsHook(make_dispatcher(), clock=lambda: 0.0)
        hook.install()
        try:
            with warnings.catch_warnings():
                warnings.simplefilter('always')
                for _ in range(3):
                    warnings.warn_explicit('repeat me', UserWarning, 'app.py', 12)
        finally:
            hook.uninstall()

        with open(log_path, 'r', encoding='utf-8') as f:
            lines = f.readlines()

        assert lines == ['[01-Jan-1970 00:00:00 UTC] User Warning: repeat me in app.py on line 12\n']
