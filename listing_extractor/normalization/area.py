"""Area normalization: square-meter values in any common spelling."""

import re
from typing import Optional

from .text import to_halfwidth

# NFKC already folds ㎡ and m² into "m2"; "m 2" is m<sup>2</sup> rendered as text
SQUARE_METER_UNIT = r"(?:m\s?2|平方メートル|平方m|平米|sqm)"

AREA_WITH_UNIT_RE = re.compile(rf"(?P<value>\d[\d,]*(?:\.\d+)?)\s*{SQUARE_METER_UNIT}", re.IGNORECASE)
LEADING_NUMBER_RE = re.compile(r"^\s*(?P<value>\d[\d,]*(?:\.\d+)?)\s*$")


def parse_area(text: Optional[str]) -> Optional[float]:
    """Parse an area in square meters.

    Accepts ``83.5㎡``, ``83.5m2``, ``83.5m²``, ``83.5平米`` and
    ``83.5平方メートル`` (all 83.5); a bare number is taken as m². The unit
    spelling is discarded. Zero or unparseable values return None.

    Examples:
        >>> parse_area("83.5㎡（25.25坪）")
        83.5
        >>> parse_area("約") is None
        True
    """
    if not text:
        return None

    normalized = to_halfwidth(text)
    match = AREA_WITH_UNIT_RE.search(normalized) or LEADING_NUMBER_RE.match(normalized)
    if not match:
        return None

    try:
        value = float(match.group("value").replace(",", ""))
    except ValueError:
        return None

    return value if value > 0 else None
