"""Dispatch from source profile to extractor."""

from typing import Dict, Type

from listing_extractor.domain.models import SourceProfile
from listing_extractor.logging import get_logger
from listing_extractor.sources.exceptions import UnsupportedSource

from .athome import AthomeExtractor
from .base import BaseExtractor
from .homes import HomesExtractor
from .suumo import SuumoExtractor

logger = get_logger(__name__, component="extractor")

EXTRACTORS: Dict[SourceProfile, Type[BaseExtractor]] = {
    SourceProfile.ATHOME: AthomeExtractor,
    SourceProfile.SUUMO: SuumoExtractor,
    SourceProfile.HOMES: HomesExtractor,
}


def get_extractor(profile: SourceProfile) -> BaseExtractor:
    """Instantiate the extractor for ``profile``.

    Raises:
        UnsupportedSource: For ``SourceProfile.UNSUPPORTED`` (or any profile
            without an extractor)

    Example:
        >>> get_extractor(SourceProfile.SUUMO).PROFILE
        <SourceProfile.SUUMO: 'suumo'>
    """
    extractor_class = EXTRACTORS.get(profile)

    if extractor_class is None:
        supported = ", ".join(sorted(p.value for p in EXTRACTORS))
        raise UnsupportedSource(f"No extractor for source profile {profile.value!r}. Supported: {supported}")

    logger.debug(
        "Creating extractor instance",
        extra={"profile": profile.value, "extractor_class": extractor_class.__name__},
    )
    return extractor_class()
