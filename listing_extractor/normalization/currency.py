"""Price normalization: Japanese yen amounts to integer yen."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .text import to_halfwidth

OKU = Decimal(100_000_000)
MAN = Decimal(10_000)

_NUMBER = r"\d[\d,]*(?:\.\d+)?"

# Tried in order; the first pattern that matches decides the unit
PRICE_PATTERNS = (
    ("oku", re.compile(rf"(?P<oku>{_NUMBER})\s*億\s*(?:(?P<man>{_NUMBER})\s*万)?")),
    ("man", re.compile(rf"(?P<man>{_NUMBER})\s*万")),
    ("yen", re.compile(rf"(?P<yen>{_NUMBER})\s*円")),
    ("bare", re.compile(rf"(?P<yen>{_NUMBER})")),
)


def parse_price(text: Optional[str]) -> Optional[int]:
    """Parse a price string to integer yen.

    ``万`` / ``万円`` multiply by 10,000, ``億`` by 100,000,000, ``円`` or no
    unit by 1. Thousands separators and full-width digits are accepted.

    Examples:
        >>> parse_price("12,345万円")
        123450000
        >>> parse_price("1億2,000万円")
        120000000
        >>> parse_price("500円")
        500
        >>> parse_price("価格未定") is None
        True
        >>> parse_price("0円") is None
        True
    """
    if not text:
        return None

    normalized = to_halfwidth(text)

    for kind, pattern in PRICE_PATTERNS:
        match = pattern.search(normalized)
        if not match:
            continue

        if kind == "oku":
            amount = _to_decimal(match.group("oku")) * OKU
            if match.group("man"):
                amount += _to_decimal(match.group("man")) * MAN
        elif kind == "man":
            amount = _to_decimal(match.group("man")) * MAN
        else:
            amount = _to_decimal(match.group("yen"))

        yen = int(amount)
        return yen if yen > 0 else None

    return None


def _to_decimal(number: str) -> Decimal:
    try:
        return Decimal(number.replace(",", ""))
    except InvalidOperation:
        return Decimal(0)
