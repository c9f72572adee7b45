"""Building structure and storey count, which SUUMO shows in one cell."""

import re
from typing import Optional

from .text import clean_text

# "10階建", "地上10階地下1階建て", "平屋建"
FLOORS_RE = re.compile(r"(?:地上)?\d+階(?:地下\d+階)?建て?|平屋(?:建て?)?")

# Separators left behind once the storey count is removed from "RC造/10階建"
_SEPARATOR_RE = re.compile(r"^[\s/・,、]+|[\s/・,、]+$")


def building_floors(text: Optional[str]) -> Optional[str]:
    """Storey count part of a structure cell (``"RC10階建"`` -> ``"10階建"``)."""
    cleaned = clean_text(text)
    if cleaned is None:
        return None

    match = FLOORS_RE.search(cleaned)
    return match.group(0) if match else None


def building_structure(text: Optional[str]) -> Optional[str]:
    """Construction type with any storey count removed (``"RC10階建"`` -> ``"RC"``).

    Returns None when nothing but a storey count is present.
    """
    cleaned = clean_text(text)
    if cleaned is None:
        return None

    structure = _SEPARATOR_RE.sub("", FLOORS_RE.sub(" ", cleaned))
    return clean_text(structure)
