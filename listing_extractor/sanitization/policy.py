"""Sanitization policy for extracted field candidates.

Structural selectors occasionally match inline ``<script>`` payloads,
tracking snippets or template leftovers instead of rendered text. Values
like that must never reach a NormalizedListing: they would be persisted and
could later be echoed into a language-model prompt. Every candidate is
therefore checked here before the assembler accepts it.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

CODE_TOKENS = ("{", "}", "function", "var ", "<script", "</", "=>", "<%", "%>")
URL_TOKENS = ("http://", "https://")
VENDOR_TOKENS = (
    "bff-loadbalancer",
    "tagmanager",
    "g.text",
    "responsetype",
    "at_time",
    "datalayer",
    "gtag(",
    "google-analytics",
    "adsbygoogle",
    "window.",
    "document.",
)
# Vocabulary of serialized API responses that leaks into access blocks
TRANSIT_PAYLOAD_TOKENS = ("status", "headers", "body")
TRANSIT_MARKERS = ("線", "駅", "徒歩", "アクセス", "バス")


@dataclass(frozen=True)
class FieldPolicy:
    """Acceptance limits for one field.

    Attributes:
        max_length: Longest plausible value
        min_length: Shortest plausible value
        allow_urls: Whether http(s) URLs are legitimate for this field
        required_markers: At least one must occur in the value (empty = no requirement)
        forbidden_tokens: Extra case-insensitive substrings rejected for this field
    """

    max_length: int
    min_length: int = 1
    allow_urls: bool = False
    required_markers: Tuple[str, ...] = ()
    forbidden_tokens: Tuple[str, ...] = ()


SHORT_TEXT = FieldPolicy(max_length=100)
NUMERIC_TEXT = FieldPolicy(max_length=200)
TITLE_TEXT = FieldPolicy(max_length=200)
ADDRESS_TEXT = FieldPolicy(max_length=200, min_length=6)
FREE_TEXT = FieldPolicy(max_length=300)
TRANSIT_TEXT = FieldPolicy(
    max_length=499,
    min_length=4,
    required_markers=TRANSIT_MARKERS,
    forbidden_tokens=TRANSIT_PAYLOAD_TOKENS,
)
ROUTE_PART = FieldPolicy(max_length=49)
URL_VALUE = FieldPolicy(max_length=2048, allow_urls=True)

DEFAULT_FIELD_POLICIES: Mapping[str, FieldPolicy] = {
    "title": TITLE_TEXT,
    "price": NUMERIC_TEXT,
    "address": ADDRESS_TEXT,
    "property_type": SHORT_TEXT,
    "floor_plan": SHORT_TEXT,
    "construction": NUMERIC_TEXT,
    "building_area": NUMERIC_TEXT,
    "land_area": NUMERIC_TEXT,
    "building_floors": SHORT_TEXT,
    "floor_number": SHORT_TEXT,
    "access": TRANSIT_TEXT,
    "building_structure": SHORT_TEXT,
    "road_access": FREE_TEXT,
    "floor_area_ratio": NUMERIC_TEXT,
    "building_coverage_ratio": NUMERIC_TEXT,
    "land_category": SHORT_TEXT,
    "zoning": FieldPolicy(max_length=100, required_markers=("地域",)),
    "urban_planning": SHORT_TEXT,
    "land_rights": SHORT_TEXT,
    "yield_rate": NUMERIC_TEXT,
    "transport_line": ROUTE_PART,
    "transport_station": ROUTE_PART,
}

DEFAULT_POLICY = FieldPolicy(max_length=200)


class SanitizationPolicy:
    """Accept/reject decisions for candidate strings, per destination field.

    Example:
        >>> policy = SanitizationPolicy()
        >>> policy.accepts("title", "南青山の中古マンション")
        True
        >>> policy.rejection_reason("title", "function(){return 1}")
        'code_token'
    """

    def __init__(self, field_policies: Optional[Mapping[str, FieldPolicy]] = None) -> None:
        self._policies = dict(DEFAULT_FIELD_POLICIES)
        if field_policies:
            self._policies.update(field_policies)

    def policy_for(self, field: str) -> FieldPolicy:
        return self._policies.get(field, DEFAULT_POLICY)

    def rejection_reason(self, field: str, text: Optional[str]) -> Optional[str]:
        """Return why ``text`` is unacceptable for ``field``, or None if it is acceptable."""
        if text is None or not text.strip():
            return "empty"

        policy = self.policy_for(field)
        value = text.strip()
        lowered = value.lower()

        if len(value) > policy.max_length:
            return "too_long"
        if len(value) < policy.min_length:
            return "too_short"
        if any(token in lowered for token in CODE_TOKENS):
            return "code_token"
        if not policy.allow_urls and any(token in lowered for token in URL_TOKENS):
            return "url"
        if any(token in lowered for token in VENDOR_TOKENS):
            return "vendor_token"
        if any(token in lowered for token in policy.forbidden_tokens):
            return "forbidden_token"
        if policy.required_markers and not any(marker in value for marker in policy.required_markers):
            return "missing_marker"

        return None

    def accepts(self, field: str, text: Optional[str]) -> bool:
        return self.rejection_reason(field, text) is None
