"""UTC time helpers.

Extraction results carry no wall-clock data; the clock is only consulted
for defaults (the reference year used to resolve "築N年") and for timing
batch runs.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Example:
        >>> utc_now().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def current_year() -> int:
    """Current calendar year in UTC."""
    return utc_now().year
