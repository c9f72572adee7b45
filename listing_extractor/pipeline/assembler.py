"""Fold ordered raw candidates into one NormalizedListing.

For each field the candidates are tried in the order the extractor emitted
them: sanitize, normalize, and keep the first value that survives both.
Derived fields are computed last, from already-accepted values only.
"""

from collections import OrderedDict
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional

from listing_extractor.domain.models import (
    LISTING_FIELDS,
    MAX_TRANSPORT_ROUTES,
    ExtractionDiagnostics,
    NormalizedListing,
    RawFieldCandidate,
    SourceProfile,
    TransportRoute,
)
from listing_extractor.logging import get_logger
from listing_extractor.normalization import (
    building_floors,
    building_structure,
    clean_text,
    coverage_ratio,
    floor_area_ratio,
    parse_area,
    parse_construction_date,
    parse_percentage,
    parse_price,
    parse_transport_routes,
)
from listing_extractor.sanitization import SanitizationPolicy
from listing_extractor.utils.timestamps import current_year

logger = get_logger(__name__, component="assembler")

TEXT_FIELDS = (
    "title",
    "address",
    "property_type",
    "floor_plan",
    "floor_number",
    "access",
    "road_access",
    "land_category",
    "zoning",
    "urban_planning",
    "land_rights",
)

VALUE_NORMALIZERS: Dict[str, Callable[[str], Any]] = {
    "price": parse_price,
    "building_area": parse_area,
    "land_area": parse_area,
    "building_coverage_ratio": coverage_ratio,
    "floor_area_ratio": floor_area_ratio,
    "building_floors": building_floors,
    "building_structure": building_structure,
    "yield_rate": parse_percentage,
}

# Candidate fields reported under a different listing field in diagnostics
DIAGNOSTIC_FIELD = {"construction": "year_built"}


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def price_per_area(price: Optional[int], land_area: Optional[float], building_area: Optional[float]) -> Optional[int]:
    """Yen per m², by land area when known, otherwise by building area.

    Example:
        >>> price_per_area(30_000_000, 100.0, 80.0)
        300000
    """
    if price is None:
        return None

    area = land_area or building_area
    if not area:
        return None

    return round_half_up(Decimal(price) / Decimal(str(area)))


class ListingAssembler:
    """Builds NormalizedListing records from extractor output.

    Args:
        policy: Sanitization policy applied to every candidate
        as_of_year: Reference year for ages such as "築20年". Defaults to
            the current UTC year, read once when the assembler is created;
            pass it explicitly for reproducible results.
    """

    def __init__(self, policy: Optional[SanitizationPolicy] = None, as_of_year: Optional[int] = None) -> None:
        self.policy = policy or SanitizationPolicy()
        self.as_of_year = as_of_year if as_of_year is not None else current_year()

    def assemble(
        self,
        profile: SourceProfile,
        candidates: Iterable[RawFieldCandidate],
        html_length: int = 0,
    ) -> NormalizedListing:
        """Resolve every field from ``candidates``; missing fields stay None.

        Never raises for missing or malformed values: they are counted in
        the diagnostics (``rejected`` / ``unparsed``) instead.
        """
        grouped: "OrderedDict[str, List[RawFieldCandidate]]" = OrderedDict()
        for candidate in candidates:
            grouped.setdefault(candidate.field, []).append(candidate)

        rejected: Dict[str, int] = {}
        unparsed: Dict[str, int] = {}
        values: Dict[str, Any] = {}

        for field, field_candidates in grouped.items():
            if field == "transportation":
                values["transportation"] = self._resolve_routes(field_candidates, rejected, unparsed)
            elif field == "construction":
                date = self._resolve(field, field_candidates, self._parse_construction, rejected, unparsed)
                if date is not None:
                    values["year_built"] = date.year
                    values["year_built_month"] = date.month
            elif field in TEXT_FIELDS:
                values[field] = self._resolve(field, field_candidates, clean_text, rejected, unparsed)
            elif field in VALUE_NORMALIZERS:
                values[field] = self._resolve(field, field_candidates, VALUE_NORMALIZERS[field], rejected, unparsed)
            else:
                logger.debug(
                    f"Ignoring candidates for unknown field: {field}",
                    extra={"event": "assembly.unknown_field", "field": field},
                )

        values["location"] = values.get("address")
        values["price_per_area"] = price_per_area(
            values.get("price"), values.get("land_area"), values.get("building_area")
        )

        found = {}
        for name in LISTING_FIELDS:
            value = values.get(name)
            found[name] = bool(value) if isinstance(value, list) else value is not None

        diagnostics = ExtractionDiagnostics(
            profile=profile,
            found=found,
            rejected=rejected,
            unparsed=unparsed,
            html_length=html_length,
        )
        listing = NormalizedListing(
            **{name: value for name, value in values.items() if value is not None},
            diagnostics=diagnostics,
        )

        logger.info(
            "Listing assembled",
            extra={
                "event": "assembly.completed",
                "profile": profile.value,
                "found_count": len(diagnostics.found_fields),
                "missing_key_fields": diagnostics.missing_key_fields,
                "rejected_count": diagnostics.total_rejected,
            },
        )
        return listing

    def _parse_construction(self, text: str):
        return parse_construction_date(text, as_of_year=self.as_of_year)

    def _resolve(
        self,
        field: str,
        candidates: List[RawFieldCandidate],
        normalize: Callable[[str], Any],
        rejected: Dict[str, int],
        unparsed: Dict[str, int],
    ) -> Any:
        key = DIAGNOSTIC_FIELD.get(field, field)

        for candidate in candidates:
            text = clean_text(candidate.raw)
            reason = self.policy.rejection_reason(field, text)
            if reason:
                rejected[key] = rejected.get(key, 0) + 1
                logger.debug(
                    "Candidate rejected by sanitization policy",
                    extra={
                        "event": "sanitization.rejected",
                        "field": field,
                        "reason": reason,
                        "location": candidate.location,
                    },
                )
                continue

            value = normalize(text)
            if value is None:
                unparsed[key] = unparsed.get(key, 0) + 1
                continue

            return value

        return None

    def _resolve_routes(
        self,
        candidates: List[RawFieldCandidate],
        rejected: Dict[str, int],
        unparsed: Dict[str, int],
    ) -> List[TransportRoute]:
        # Candidates are whole access blocks or page text; only route parts are sanitized
        for candidate in candidates:
            routes = parse_transport_routes(candidate.raw, limit=None)
            if not routes:
                unparsed["transportation"] = unparsed.get("transportation", 0) + 1
                continue

            accepted = [
                route
                for route in routes
                if self.policy.accepts("transport_line", route.line)
                and self.policy.accepts("transport_station", route.station)
            ]
            dropped = len(routes) - len(accepted)
            if dropped:
                rejected["transportation"] = rejected.get("transportation", 0) + dropped
                logger.debug(
                    "Transport routes rejected by sanitization policy",
                    extra={
                        "event": "sanitization.rejected",
                        "field": "transportation",
                        "count": dropped,
                        "location": candidate.location,
                    },
                )

            if accepted:
                return accepted[:MAX_TRANSPORT_ROUTES]

        return []
