"""Percentage normalization for coverage, floor-area and yield ratios."""

import re
from typing import List, Optional, Tuple

from .text import to_halfwidth

PERCENT_RE = re.compile(r"(?P<value>\d+(?:\.\d+)?)\s*%")
NUMBER_RE = re.compile(r"(?P<value>\d+(?:\.\d+)?)")


def _percent_values(text: Optional[str]) -> List[float]:
    if not text:
        return []

    normalized = to_halfwidth(text)
    values = [float(m.group("value")) for m in PERCENT_RE.finditer(normalized)]
    if not values:
        # "60/200" without percent signs
        values = [float(m.group("value")) for m in NUMBER_RE.finditer(normalized)]
    return values


def parse_percentage(text: Optional[str]) -> Optional[float]:
    """Return the first percentage in ``text`` as a number (``"5.2%"`` -> 5.2)."""
    values = _percent_values(text)
    return values[0] if values else None


def split_ratio_pair(text: Optional[str]) -> Tuple[Optional[float], Optional[float]]:
    """Split a combined ``建ぺい率/容積率`` value such as ``60%/200%``.

    The first number is the building coverage ratio and the number after the
    separator is the floor-area ratio; either side may be None.
    """
    values = _percent_values(text)
    first = values[0] if values else None
    second = values[1] if len(values) > 1 else None
    return first, second


def coverage_ratio(text: Optional[str]) -> Optional[float]:
    return split_ratio_pair(text)[0]


def floor_area_ratio(text: Optional[str]) -> Optional[float]:
    """Floor-area ratio: the second number of a pair, otherwise the only one."""
    first, second = split_ratio_pair(text)
    return second if second is not None else first
