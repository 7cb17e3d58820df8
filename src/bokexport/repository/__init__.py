"""Content repository access for the exporter."""

from .base import ContentRepository
from .snapshot import SnapshotRepository

__all__ = ["ContentRepository", "SnapshotRepository"]
