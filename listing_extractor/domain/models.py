"""Core domain models for listing extraction.

This module defines the data structures shared across the extractor:
- SourceProfile: closed set of supported listing sites
- RawFieldCandidate: un-normalized string produced by a field extractor
- TransportRoute: one "line / station / walk minutes" access entry
- ExtractionDiagnostics: which fields were found, rejected or unparsed
- NormalizedListing: canonical, site-independent listing record
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_TRANSPORT_ROUTES = 5

# Scalar listing fields in canonical order (derived price_per_area included)
LISTING_FIELDS = (
    "title",
    "price",
    "price_per_area",
    "address",
    "location",
    "property_type",
    "floor_plan",
    "year_built",
    "year_built_month",
    "building_area",
    "land_area",
    "building_floors",
    "floor_number",
    "access",
    "building_structure",
    "road_access",
    "floor_area_ratio",
    "building_coverage_ratio",
    "land_category",
    "zoning",
    "urban_planning",
    "land_rights",
    "transportation",
    "yield_rate",
)

# A listing missing any of these is too incomplete to use without re-fetching
KEY_FIELDS = ("title", "address", "floor_plan")


class SourceProfile(str, Enum):
    """Supported listing sites. Selected once per URL by hostname."""

    ATHOME = "athome"
    SUUMO = "suumo"
    HOMES = "homes"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RawFieldCandidate:
    """A raw string believed to hold one listing attribute.

    Attributes:
        field: Listing field the value is destined for (e.g. "price")
        raw: Text as found in the document, before normalization
        location: Strategy that produced it, e.g. "selector:.price" or "table:価格"
    """

    field: str
    raw: str
    location: str


class TransportRoute(BaseModel):
    """One public-transport access entry of a listing."""

    line: str = Field(..., min_length=1, description="Railway line, e.g. JR山手線")
    station: str = Field(..., min_length=1, description="Station name, e.g. 渋谷駅")
    walk_minutes: int = Field(..., ge=0, description="Walking time to the station in minutes")

    model_config = {"frozen": True}


class ExtractionDiagnostics(BaseModel):
    """Per-field bookkeeping for one extraction call.

    ``found`` has an entry for every listing field. ``rejected`` counts
    candidates dropped by the sanitization policy and ``unparsed`` counts
    candidates that passed sanitization but yielded no value; repeated
    rejections on one profile usually mean the site's markup has changed.
    Nothing here depends on wall-clock time, so re-extracting the same
    document gives identical diagnostics.
    """

    profile: SourceProfile = Field(..., description="Source profile the listing came from")
    found: Dict[str, bool] = Field(default_factory=dict)
    rejected: Dict[str, int] = Field(default_factory=dict)
    unparsed: Dict[str, int] = Field(default_factory=dict)
    notes: List[str] = Field(default_factory=list)
    html_length: int = Field(0, ge=0, description="Length of the extracted document text")

    @property
    def found_fields(self) -> List[str]:
        return [name for name in LISTING_FIELDS if self.found.get(name)]

    @property
    def missing_fields(self) -> List[str]:
        return [name for name in LISTING_FIELDS if not self.found.get(name)]

    @property
    def missing_key_fields(self) -> List[str]:
        return [name for name in KEY_FIELDS if not self.found.get(name)]

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def needs_reextraction(self) -> bool:
        """Whether a caller should re-fetch: title, address or floor plan is missing."""
        return bool(self.missing_key_fields)


class NormalizedListing(BaseModel):
    """Canonical listing record.

    Every field is independently optional; absence is ``None`` (or an empty
    route list), never ``0`` or ``""``. Prices are integer yen, areas are
    square meters, ratios and yield are percentages.
    """

    title: Optional[str] = None
    price: Optional[int] = Field(None, ge=0, description="Price in yen")
    price_per_area: Optional[int] = Field(None, ge=0, description="Yen per square meter")
    address: Optional[str] = None
    location: Optional[str] = None
    property_type: Optional[str] = None
    floor_plan: Optional[str] = None
    year_built: Optional[int] = Field(None, description="Construction year (western calendar)")
    year_built_month: Optional[int] = Field(None, ge=1, le=12)
    building_area: Optional[float] = Field(None, gt=0, description="Building area in m²")
    land_area: Optional[float] = Field(None, gt=0, description="Land area in m²")
    building_floors: Optional[str] = None
    floor_number: Optional[str] = None
    access: Optional[str] = None
    building_structure: Optional[str] = None
    road_access: Optional[str] = None
    floor_area_ratio: Optional[float] = Field(None, ge=0)
    building_coverage_ratio: Optional[float] = Field(None, ge=0)
    land_category: Optional[str] = None
    zoning: Optional[str] = None
    urban_planning: Optional[str] = None
    land_rights: Optional[str] = None
    transportation: List[TransportRoute] = Field(default_factory=list, max_length=MAX_TRANSPORT_ROUTES)
    yield_rate: Optional[float] = Field(None, ge=0)
    diagnostics: ExtractionDiagnostics

    model_config = {"frozen": True}

    @field_validator(
        "title",
        "address",
        "location",
        "property_type",
        "floor_plan",
        "building_floors",
        "floor_number",
        "access",
        "building_structure",
        "road_access",
        "land_category",
        "zoning",
        "urban_planning",
        "land_rights",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Empty strings are never stored; they would look like real data."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @classmethod
    def empty(cls, profile: SourceProfile, note: Optional[str] = None) -> "NormalizedListing":
        """All-empty listing, used when a document yields nothing at all."""
        diagnostics = ExtractionDiagnostics(
            profile=profile,
            found={name: False for name in LISTING_FIELDS},
            notes=[note] if note else [],
        )
        return cls(diagnostics=diagnostics)

    @property
    def is_empty(self) -> bool:
        return not self.diagnostics.found_fields
