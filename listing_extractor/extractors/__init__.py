"""Per-site field extractors producing ordered raw candidates."""

from .athome import AthomeExtractor
from .base import BaseExtractor
from .document import ListingDocument, element_text, iter_visible_strings
from .factory import EXTRACTORS, get_extractor
from .homes import HomesExtractor
from .rules import FieldRule, label_selectors
from .suumo import SuumoExtractor

__all__ = [
    "ListingDocument",
    "element_text",
    "iter_visible_strings",
    "FieldRule",
    "label_selectors",
    "BaseExtractor",
    "AthomeExtractor",
    "SuumoExtractor",
    "HomesExtractor",
    "EXTRACTORS",
    "get_extractor",
]
