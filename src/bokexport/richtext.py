"""Lenient splitting of rich-text fields into paragraph and list entries."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, Tag

_LOGGER = logging.getLogger(__name__)


def _parse(html: Optional[str]) -> Optional[BeautifulSoup]:
    if not html or not html.strip():
        return None
    # html.parser never raises on malformed markup; unclosed or stray tags are
    # repaired or dropped.
    return BeautifulSoup(html, "html.parser")


def _own_text(paragraph: Tag) -> str:
    # html.parser nests an unclosed <p> inside the previous one; text that
    # belongs to a nested paragraph is left to that paragraph.
    return "".join(
        text
        for text in paragraph.find_all(string=True)
        if not isinstance(text, Comment) and text.find_parent("p") is paragraph
    )


def split_paragraphs(html: Optional[str]) -> List[str]:
    """Return the trimmed text of each paragraph in ``html``.

    Markup without ``<p>`` elements is treated as a single paragraph. Empty
    paragraphs are dropped.
    """

    soup = _parse(html)
    if soup is None:
        return []
    paragraphs = soup.find_all("p")
    if paragraphs:
        texts = [_own_text(paragraph) for paragraph in paragraphs]
    else:
        _LOGGER.debug("No paragraph markup found; using the whole field as one entry")
        texts = [soup.get_text()]
    return [text.strip() for text in texts if text and text.strip()]


def list_items(html: Optional[str]) -> List[str]:
    """Return the trimmed text of each ``<li>`` element in ``html``."""

    soup = _parse(html)
    if soup is None:
        return []
    items = []
    for item in soup.find_all("li"):
        text = item.get_text().strip()
        if text:
            items.append(text)
    return items


__all__ = ["list_items", "split_paragraphs"]
