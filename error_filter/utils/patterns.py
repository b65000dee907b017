"""
Pattern compilation for whitelist and blacklist matching.

Patterns are accepted either as plain Python regular expressions or in the
delimited form '/body/flags' that is common in configuration files shared
with other tooling. A pattern that fails to compile never raises out of
this module; the caller receives None and treats it as non-matching.
"""

import logging
import re
from typing import Optional, Pattern, Sequence, List, Tuple

from error_filter.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Flag letters allowed after the closing delimiter
_FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'u': 0,  # str patterns are unicode already
}

_DELIMITERS = '/#~'


def split_delimited(pattern: str) -> Tuple[str, int]:
    """
    Split a '/body/flags' pattern into body and re flags.

    Patterns without a recognized delimiter are returned unchanged with no
    flags.

    Args:
        pattern: Raw pattern string

    Returns:
        Tuple of (regex body, re flags)

    Examples:
        >>> split_delimited('/deprecated/i') == ('deprecated', re.IGNORECASE)
        True
        >>> split_delimited('plain.*text')
        ('plain.*text', 0)
    """
    if len(pattern) >= 2 and pattern[0] in _DELIMITERS:
        delimiter = pattern[0]
        end = pattern.rfind(delimiter)
        if end > 0:
            suffix = pattern[end + 1:]
            if all(ch in _FLAG_MAP for ch in suffix):
                flags = 0
                for ch in suffix:
                    flags |= _FLAG_MAP[ch]
                return pattern[1:end], flags
    return pattern, 0


def compile_pattern(pattern: str) -> Pattern:
    """
    Compile one pattern.

    Args:
        pattern: Plain or delimited regular expression

    Returns:
        Compiled regular expression

    Raises:
        ConfigurationError: If the pattern is not a string or does not compile
    """
    if not isinstance(pattern, str):
        raise ConfigurationError(
            f"Pattern must be a string, got {type(pattern).__name__}"
        )

    body, flags = split_delimited(pattern)

    try:
        return re.compile(body, flags)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid pattern {pattern!r}",
            validation_errors=[str(e)]
        ) from e


def compile_patterns(patterns: Sequence[str]) -> List[Optional[Pattern]]:
    """
    Compile an ordered pattern list, keeping invalid entries as None.

    Invalid entries are logged once here and then never match.

    Args:
        patterns: Ordered pattern strings

    Returns:
        List with the same length and order; None marks an invalid pattern
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(compile_pattern(pattern))
        except ConfigurationError as e:
            logger.warning(f"Ignoring pattern that will never match: {e}")
            compiled.append(None)
    return compiled


def first_match(compiled: Sequence[Optional[Pattern]], text: str) -> Optional[Pattern]:
    """
    Return the first pattern that matches text, or None.

    Args:
        compiled: Output of compile_patterns()
        text: Text to search

    Returns:
        First matching compiled pattern, or None
    """
    for regex in compiled:
        if regex is None:
            continue
        try:
            if regex.search(text):
                return regex
        except (TypeError, RecursionError) as e:
            logger.debug(f"Pattern {regex.pattern!r} failed to match: {e}")
    return None
