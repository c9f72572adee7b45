"""Data models for fetched documents."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class FetchedPage:
    """A fully received listing page.

    Attributes:
        url: Final URL after redirects
        status: HTTP status code
        headers: Response headers (lower-cased names)
        text: Decoded document text
        encoding: Encoding used to decode the body
    """

    url: str
    status: int
    text: str
    encoding: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")
