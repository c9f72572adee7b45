"""Transit route extraction from free-form access text."""

import re
from typing import List, Optional, Tuple

from ..domain.models import MAX_TRANSPORT_ROUTES, TransportRoute
from .text import to_halfwidth

# Characters that never occur inside a line or station name
_NAME = r"[^\s、,:;/()|「」『』{}<>]"

# Longest name prefix tried before the 線/駅 suffix. Bounded so scanning an
# unspaced paragraph stays linear; kept above the 49-character route-part
# limit so an overlong name still matches long enough to be rejected.
_NAME_MAX = 64
_LINE = rf"{_NAME}{{1,{_NAME_MAX}}}?線"
_STATION = rf"{_NAME}{{1,{_NAME_MAX}}}?駅"

ROUTE_PATTERNS = (
    # "JR山手線 渋谷駅 徒歩5分"
    re.compile(rf"(?P<line>{_LINE})\s+(?P<station>{_STATION})\s+(?:徒歩|歩)?\s*約?(?P<walk>\d{{1,3}})\s*分"),
    # "JR山手線渋谷駅徒歩5分", "銀座線銀座駅 徒歩3分"
    re.compile(rf"(?P<line>{_LINE})\s*(?P<station>{_STATION})\s*(?:徒歩|歩)?\s*約?(?P<walk>\d{{1,3}})\s*分"),
    # "東急東横線「代官山」駅 徒歩7分"
    re.compile(
        rf"(?P<line>{_LINE})\s*[「『](?P<station>[^」』\s]{{1,30}})[」』]\s*駅?\s*(?:徒歩|歩)\s*約?(?P<walk>\d{{1,3}})\s*分"
    ),
)


def parse_transport_routes(text: Optional[str], limit: Optional[int] = MAX_TRANSPORT_ROUTES) -> List[TransportRoute]:
    """Find ``line / station / walk minutes`` triples in ``text``.

    Matches from every pattern are merged in document order, repeated
    (line, station) pairs keep their first occurrence, and the result is
    capped at ``limit`` routes (None for no cap).

    Example:
        >>> [r.station for r in parse_transport_routes("JR山手線 渋谷駅 徒歩5分")]
        ['渋谷駅']
    """
    if not text:
        return []

    normalized = to_halfwidth(text)

    matches: List[Tuple[int, int, re.Match]] = []
    for order, pattern in enumerate(ROUTE_PATTERNS):
        for match in pattern.finditer(normalized):
            matches.append((match.start(), order, match))
    matches.sort(key=lambda item: (item[0], item[1]))

    routes: List[TransportRoute] = []
    seen = set()
    for _, _, match in matches:
        line = match.group("line").strip()
        station = match.group("station").strip()
        if not station.endswith("駅"):
            station = f"{station}駅"

        key = (line, station)
        if key in seen:
            continue
        seen.add(key)

        routes.append(TransportRoute(line=line, station=station, walk_minutes=int(match.group("walk"))))
        if limit is not None and len(routes) >= limit:
            break

    return routes
