"""Parsed listing page shared by every extraction strategy."""

from dataclasses import dataclass
from typing import Iterator, Optional

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction, Tag

from ..normalization.text import to_halfwidth

# Subtrees whose strings never render as page text
HIDDEN_TAGS = frozenset({"script", "style", "noscript", "template"})
HIDDEN_STRING_TYPES = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

PARSER = "html.parser"


def iter_visible_strings(root: Tag) -> Iterator[str]:
    """Yield stripped, non-empty text nodes under ``root`` that a browser would render.

    The tree is not modified: hidden subtrees are skipped, not decomposed.
    """
    for string in root.find_all(string=True):
        if isinstance(string, HIDDEN_STRING_TYPES):
            continue
        if any(parent.name in HIDDEN_TAGS for parent in string.parents):
            continue
        text = string.strip()
        if text:
            yield text


def element_text(element: Optional[Tag]) -> str:
    """Visible text of one element, strings joined by single spaces."""
    if element is None:
        return ""
    return " ".join(iter_visible_strings(element))


@dataclass(frozen=True)
class ListingDocument:
    """A listing page parsed once per extraction call.

    Attributes:
        url: Page URL (used for path hints such as ``/mansion/``)
        html: Raw document text
        soup: Parsed tree; treat as read-only
        visible_text: Rendered text, one text node per line
        normalized_text: ``visible_text`` after NFKC normalization
    """

    url: str
    html: str
    soup: BeautifulSoup
    visible_text: str
    normalized_text: str

    @classmethod
    def parse(cls, url: str, html: str) -> "ListingDocument":
        soup = BeautifulSoup(html or "", PARSER)
        visible_text = "\n".join(iter_visible_strings(soup))
        return cls(
            url=url,
            html=html or "",
            soup=soup,
            visible_text=visible_text,
            normalized_text=to_halfwidth(visible_text),
        )

    def select_text(self, selector: str) -> Optional[str]:
        """Text of the first element matching ``selector`` that has visible text."""
        for element in self.soup.select(selector):
            text = element_text(element)
            if text:
                return text
        return None
