"""Duration parsing utilities for timeout settings."""

import re
from typing import Union


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""

    pass


_ISO_PATTERN = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?$")
_HUMAN_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|s|m|h)")

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Parse a duration to seconds.

    Accepts plain numbers (seconds), human-readable strings and ISO-8601
    time durations:
    - Numbers: 20, 7.5, "20"
    - Human-readable: "500ms", "20s", "1m", "1m30s"
    - ISO-8601: "PT20S", "PT1M30S"

    Args:
        value: Duration to parse

    Returns:
        Duration in seconds

    Raises:
        DurationParseError: If the value is invalid, zero, or negative

    Examples:
        >>> parse_duration("20s")
        20.0
        >>> parse_duration("PT1M")
        60.0
        >>> parse_duration(7.5)
        7.5
    """
    if isinstance(value, bool):
        raise DurationParseError(f"Invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        return _require_positive(float(value), str(value))

    duration_str = value.strip()
    if not duration_str:
        raise DurationParseError("Duration string cannot be empty")

    try:
        return _require_positive(float(duration_str), duration_str)
    except ValueError:
        pass

    if duration_str.upper().startswith("P"):
        return _parse_iso8601_duration(duration_str)

    return _parse_human_readable_duration(duration_str)


def _parse_iso8601_duration(duration_str: str) -> float:
    """Parse an ISO-8601 time duration such as ``PT1M30S``."""
    match = _ISO_PATTERN.match(duration_str.upper())
    if not match or not any(match.groups()):
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{duration_str}'. "
            "Expected format like 'PT20S' or 'PT1M30S'"
        )

    hours, minutes, seconds = match.groups()
    total = 0.0
    if hours:
        total += int(hours) * 3600
    if minutes:
        total += int(minutes) * 60
    if seconds:
        total += float(seconds)

    return _require_positive(total, duration_str)


def _parse_human_readable_duration(duration_str: str) -> float:
    """Parse ``500ms``, ``20s``, ``1m30s`` style durations."""
    lowered = duration_str.lower()
    matches = _HUMAN_PATTERN.findall(lowered)

    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{duration_str}'. "
            "Expected format like '20s', '1m', '500ms' or combinations like '1m30s'"
        )

    # Reject trailing garbage such as "20sx"
    parsed_str = "".join(f"{num}{unit}" for num, unit in matches)
    if parsed_str != re.sub(r"\s+", "", lowered):
        raise DurationParseError(
            f"Invalid characters in duration: '{duration_str}'. "
            "Use only numbers and units: ms, s, m, h"
        )

    total = sum(float(num) * _UNIT_SECONDS[unit] for num, unit in matches)
    return _require_positive(total, duration_str)


def _require_positive(seconds: float, original: str) -> float:
    if seconds <= 0:
        raise DurationParseError(f"Duration must be positive: '{original}'")
    return seconds


def validate_duration_range(
    duration_seconds: float,
    min_seconds: float = 1.0,
    max_seconds: float = 120.0,
) -> None:
    """
    Validate that a duration is within an acceptable range.

    Args:
        duration_seconds: Duration in seconds to validate
        min_seconds: Minimum allowed duration (default: 1 second)
        max_seconds: Maximum allowed duration (default: 2 minutes)

    Raises:
        DurationParseError: If duration is outside the valid range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Timeout too short: {duration_seconds:g}s. Minimum is {min_seconds:g}s."
        )

    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Timeout too long: {duration_seconds:g}s. Maximum is {max_seconds:g}s."
        )
