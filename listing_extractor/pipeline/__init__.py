"""Extraction pipeline: assembling candidates into listings and orchestrating one extraction call."""

from .assembler import ListingAssembler, price_per_area, round_half_up
from .models import ExtractionOutcome
from .service import ListingExtractionService

__all__ = [
    "ListingExtractionService",
    "ListingAssembler",
    "ExtractionOutcome",
    "price_per_area",
    "round_half_up",
]
