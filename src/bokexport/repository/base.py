"""Interface of the content repository consumed by the exporter."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ..models import Category, ContentRecord


class ContentRepository(Protocol):
    """Read-only view of the content-management site.

    Implementations must return categories and record handles in a stable
    order: node identifiers are allocated in visitation order.
    """

    def get_category_tree(self, taxonomy_id: int) -> Sequence[Category]:
        ...

    def query_content_by_category(
        self,
        category_id: int,
        *,
        published_only: bool = True,
        limit: Optional[int] = None,
    ) -> List[int]:
        ...

    def load_content_record(self, handle: int) -> ContentRecord:
        ...


__all__ = ["ContentRepository"]
