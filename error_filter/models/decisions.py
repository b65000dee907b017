"""
Decision enumerations returned by the policy engine, cache and dispatcher.
"""

from enum import Enum


class PolicyDecision(str, Enum):
    """Outcome of the policy checks that run before the cache."""

    PASS = 'PASS'
    SUPPRESS = 'SUPPRESS'
    DEFER = 'DEFER'


class CacheDecision(str, Enum):
    """Outcome of a cache lookup."""

    NOVEL = 'NOVEL'
    SUPPRESS = 'SUPPRESS'


class Disposition(str, Enum):
    """
    What the dispatcher did with an event.

    IGNORED: severity is not managed by the filter
    PASSED: whitelisted, left to the host's default handling
    SUPPRESSED: blacklisted or a repeat inside the dedup window
    NOVEL: first occurrence in the window, written to the sink
    """

    IGNORED = 'IGNORED'
    PASSED = 'PASSED'
    SUPPRESSED = 'SUPPRESSED'
    NOVEL = 'NOVEL'

    @property
    def handled(self) -> bool:
        """True when the host's default handling must not run."""
        return self in (Disposition.SUPPRESSED, Disposition.NOVEL)
