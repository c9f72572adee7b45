"""Construction date normalization (築年月)."""

import re
from dataclasses import dataclass
from typing import Optional

from ..utils.timestamps import current_year
from .text import to_halfwidth

# Gregorian year = era year + offset
ERA_OFFSETS = {
    "明治": 1867,
    "大正": 1911,
    "昭和": 1925,
    "平成": 1988,
    "令和": 2018,
}

ABSOLUTE_DATE_RE = re.compile(r"(?P<year>(?:18|19|20)\d{2})\s*年(?:\s*(?P<month>\d{1,2})\s*月)?")
ERA_DATE_RE = re.compile(
    r"(?P<era>明治|大正|昭和|平成|令和)\s*(?P<year>元|\d{1,2})\s*年(?:\s*(?P<month>\d{1,2})\s*月)?"
)
SLASH_DATE_RE = re.compile(r"(?P<year>(?:18|19|20)\d{2})\s*[/.\-]\s*(?P<month>\d{1,2})(?!\d)")
AGE_RE = re.compile(r"築\s*(?P<age>\d{1,3})\s*年")
NEW_BUILD_RE = re.compile(r"新築")


@dataclass(frozen=True)
class ConstructionDate:
    year: int
    month: Optional[int] = None


def parse_construction_date(text: Optional[str], as_of_year: Optional[int] = None) -> Optional[ConstructionDate]:
    """Parse a construction date into year and optional month.

    Absolute forms (``1998年3月``, ``1998/03``, ``平成10年3月``) win over an
    age (``築20年``), which is resolved against ``as_of_year`` (defaults to
    the current UTC year). An out-of-range month is dropped, keeping the year.

    Examples:
        >>> parse_construction_date("1998年3月（築26年）")
        ConstructionDate(year=1998, month=3)
        >>> parse_construction_date("築20年", as_of_year=2024)
        ConstructionDate(year=2004, month=None)
    """
    if not text:
        return None

    normalized = to_halfwidth(text)

    match = ABSOLUTE_DATE_RE.search(normalized)
    if match:
        return ConstructionDate(int(match.group("year")), _valid_month(match.group("month")))

    match = ERA_DATE_RE.search(normalized)
    if match:
        era_year = 1 if match.group("year") == "元" else int(match.group("year"))
        year = ERA_OFFSETS[match.group("era")] + era_year
        return ConstructionDate(year, _valid_month(match.group("month")))

    match = SLASH_DATE_RE.search(normalized)
    if match:
        return ConstructionDate(int(match.group("year")), _valid_month(match.group("month")))

    reference_year = as_of_year if as_of_year is not None else current_year()

    match = AGE_RE.search(normalized)
    if match:
        return ConstructionDate(reference_year - int(match.group("age")))

    if NEW_BUILD_RE.search(normalized):
        return ConstructionDate(reference_year)

    return None


def _valid_month(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    month = int(raw)
    return month if 1 <= month <= 12 else None
