"""
Timezone resolution for log line timestamps.
"""

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve a timezone name.

    'UTC' maps to the built-in UTC so no tz database is needed for the default.

    Args:
        name: IANA timezone name, or 'UTC'/'Z'

    Returns:
        tzinfo for the name

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the name is unknown
        ValueError: If the name is malformed
    """
    if name.strip().upper() in ('UTC', 'Z'):
        return timezone.utc
    return ZoneInfo(name)
