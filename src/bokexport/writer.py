"""Write the export document to disk."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of writing an export document."""

    path: Path
    bytes_written: int
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def encode_document(document: Mapping[str, Any]) -> bytes:
    """Encode ``document`` as UTF-8 JSON, dropping unencodable characters."""

    text = json.dumps(document, ensure_ascii=False)
    # Lone surrogates cannot be represented in UTF-8.
    return text.encode("utf-8", errors="ignore")


def write_document(document: Mapping[str, Any], path: Path) -> WriteResult:
    """Overwrite ``path`` with the encoded document.

    An encoding failure is reported on the result rather than raised; the file
    is still written with whatever could be produced.
    """

    error = None
    try:
        payload = encode_document(document)
    except (TypeError, ValueError) as exc:
        error = str(exc)
        payload = b""
        _LOGGER.error("Failed to encode export document: %s", exc)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    _LOGGER.info("Wrote %d bytes to %s", len(payload), path)
    return WriteResult(path=path, bytes_written=len(payload), error=error)


__all__ = ["WriteResult", "encode_document", "write_document"]
