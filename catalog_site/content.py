"""HTML extraction of translation tables from cached wiki pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from bs4 import BeautifulSoup

CONTENT_SELECTOR = "#mw-content-text"
REFERENCE_SELECTOR = f"{CONTENT_SELECTOR} .reference"
TABLE_SELECTOR = f"{CONTENT_SELECTOR} .tt-table"


@dataclass
class TranslationText:
    """Cell text collected from a translation table, in document order."""

    ja: List[str]
    zh: List[str]

    @property
    def ja_text(self) -> str:
        return "\n".join(self.ja)

    @property
    def zh_text(self) -> str:
        return "\n".join(self.zh)


def _strip_references(soup: BeautifulSoup) -> BeautifulSoup:
    """Remove citation markers so they never leak into cell text."""
    for tag in soup.select(REFERENCE_SELECTOR):
        tag.decompose()
    return soup


def _cells(soup: BeautifulSoup, lang: str) -> List[str]:
    return [cell.get_text() for cell in soup.select(f'{TABLE_SELECTOR} td[lang="{lang}"]')]


def extract_translation(markup: Union[str, bytes]) -> TranslationText:
    """Extract the Japanese and Chinese columns from a translation page."""
    soup = _strip_references(BeautifulSoup(markup, "html.parser"))
    return TranslationText(ja=_cells(soup, "ja"), zh=_cells(soup, "zh"))
