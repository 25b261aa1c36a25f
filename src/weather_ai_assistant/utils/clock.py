"""Time source abstraction.

Components that need "now" take a ``Clock`` so tests can substitute a fixed
or manually advanced time.
"""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def from_unix(timestamp: int | float) -> datetime:
    """Convert a Unix timestamp to a timezone-aware UTC datetime.

    Args:
        timestamp: Seconds since the epoch.

    Returns:
        The corresponding UTC datetime.
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)
