"""Declarative selector rules for label-adjacent extraction."""

from dataclasses import dataclass
from typing import Tuple


def label_selectors(*labels: str) -> Tuple[str, ...]:
    """Selectors for the value cell next to a label cell.

    Covers both definition lists (``<dt>価格</dt><dd>…</dd>``) and tables
    (``<th>価格</th><td>…</td>``).

    Example:
        >>> label_selectors("価格")
        ("dt:-soup-contains('価格') + dd", "th:-soup-contains('価格') + td")
    """
    selectors = []
    for label in labels:
        selectors.append(f"dt:-soup-contains('{label}') + dd")
        selectors.append(f"th:-soup-contains('{label}') + td")
    return tuple(selectors)


@dataclass(frozen=True)
class FieldRule:
    """Ordered CSS selectors for one listing field.

    Each selector contributes at most one candidate: the text of its first
    element with visible text.
    """

    field: str
    selectors: Tuple[str, ...]
