"""Free-text normalisation applied to every exported string field."""

from __future__ import annotations

import re
from typing import Optional

_ENTITY_REPLACEMENTS = (
    ("&lsquo;", "'"),
    ("&rsquo;", "'"),
    ("&amp;", "&"),
    ("&nbsp;", " "),
)
# Longest sequences first so CRLF followed by a tab collapses to one space.
_LINE_BREAKS = ("\r\n\t", "\r\n", "\r", "\n")
_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
# A "<" not followed by a letter, "/", "!" or "?" is text, not markup.
_TAG_PATTERN = re.compile(r"</?[A-Za-z!?][^>]*>")


def decode_entities(text: str) -> str:
    for entity, replacement in _ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    return text


def collapse_line_breaks(text: str) -> str:
    for sequence in _LINE_BREAKS:
        text = text.replace(sequence, " ")
    return text


def strip_tags(text: str) -> str:
    """Remove markup tags and comments, keeping the inner text."""

    return _TAG_PATTERN.sub("", _COMMENT_PATTERN.sub("", text))


def escape(text: str) -> str:
    """Backslash-escape backslashes and double quotes.

    Not idempotent: escaping an escaped string escapes it again.
    """

    return text.replace("\\", "\\\\").replace('"', '\\"')


def normalize(text: Optional[str]) -> str:
    """Decode entities, collapse line breaks and strip tags."""

    if not text:
        return ""
    return strip_tags(collapse_line_breaks(decode_entities(text)))


def sanitize(text: Optional[str]) -> str:
    """Return ``text`` normalised and escaped for embedding in the export.

    Call exactly once per field: the escaping step doubles up on repeated
    application.
    """

    return escape(normalize(text))


__all__ = [
    "collapse_line_breaks",
    "decode_entities",
    "escape",
    "normalize",
    "sanitize",
    "strip_tags",
]
