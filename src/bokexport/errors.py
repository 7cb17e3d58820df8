"""Exceptions raised by the Living Textbook export pipeline."""

from __future__ import annotations

from typing import Optional


class ExportError(RuntimeError):
    """Base class for export failures."""


class RepositoryError(ExportError):
    """Raised when the content repository cannot satisfy a request."""

    def __init__(self, message: str, *, handle: Optional[int] = None) -> None:
        super().__init__(message)
        self.handle = handle


class SnapshotFormatError(RepositoryError):
    """Raised when a repository snapshot does not have the expected shape."""


__all__ = ["ExportError", "RepositoryError", "SnapshotFormatError"]
