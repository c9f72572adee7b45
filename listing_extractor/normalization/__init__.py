"""Pure normalizers from raw Japanese listing strings to typed values."""

from .area import parse_area
from .construction import ConstructionDate, parse_construction_date
from .currency import parse_price
from .ratios import coverage_ratio, floor_area_ratio, parse_percentage, split_ratio_pair
from .structure import building_floors, building_structure
from .text import clean_text, to_halfwidth
from .transport import parse_transport_routes

__all__ = [
    "clean_text",
    "to_halfwidth",
    "parse_price",
    "parse_area",
    "ConstructionDate",
    "parse_construction_date",
    "parse_percentage",
    "split_ratio_pair",
    "coverage_ratio",
    "floor_area_ratio",
    "building_floors",
    "building_structure",
    "parse_transport_routes",
]
