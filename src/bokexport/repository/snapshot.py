"""Content repository backed by a JSON snapshot of the site."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..errors import RepositoryError, SnapshotFormatError
from ..models import Category, ContentRecord, Term

_LOGGER = logging.getLogger(__name__)


def _first_value(value: Any) -> Optional[str]:
    """Return the first value of a single- or multi-valued field."""

    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("value")
    if value is None:
        return None
    return str(value)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        _LOGGER.debug("Ignoring non-numeric identifier %r", value)
        return None


def _int_list(value: Any) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    ids = []
    for item in value:
        parsed = _as_int(item)
        if parsed is not None:
            ids.append(parsed)
    return ids


def _is_published(record: Mapping[str, Any]) -> bool:
    status = record.get("status", 1)
    if isinstance(status, str):
        return status.strip().lower() in {"1", "true", "published"}
    return bool(status)


class SnapshotRepository:
    """Serve taxonomy and topic data from a snapshot mapping.

    Expected shape::

        {"taxonomies": {"1": [{"id": 7, "name": "Cartography", "path": "/ka/cv"}]},
         "terms": {"42": "Geodesy"},
         "records": [{"id": 101, "status": 1, "code": "CV-01", ...}]}
    """

    def __init__(self, snapshot: Mapping[str, Any], *, base_url: str) -> None:
        if not isinstance(snapshot, Mapping):
            raise SnapshotFormatError("Snapshot root must be a JSON object")
        taxonomies = snapshot.get("taxonomies") or {}
        records = snapshot.get("records") or []
        terms = snapshot.get("terms") or {}
        if not isinstance(taxonomies, Mapping):
            raise SnapshotFormatError("'taxonomies' must map taxonomy ids to term lists")
        if not isinstance(records, list):
            raise SnapshotFormatError("'records' must be a list")
        if not isinstance(terms, Mapping):
            raise SnapshotFormatError("'terms' must map term ids to names")
        self._base_url = base_url.rstrip("/")
        self._taxonomies = {str(key): value for key, value in taxonomies.items()}
        self._terms = {str(key): str(value) for key, value in terms.items()}
        self._records: Dict[int, Mapping[str, Any]] = {}
        for raw in records:
            record_id = _as_int(raw.get("id")) if isinstance(raw, Mapping) else None
            if record_id is None:
                raise SnapshotFormatError(f"Record without a numeric id: {raw!r}")
            self._records[record_id] = raw

    @classmethod
    def from_path(cls, path: Path, *, base_url: str) -> "SnapshotRepository":
        if not path.exists():
            raise RepositoryError(f"Repository snapshot not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SnapshotFormatError(f"Repository snapshot is not valid JSON: {exc}") from exc
        _LOGGER.info("Loaded repository snapshot %s", path)
        return cls(payload, base_url=base_url)

    def _url(self, path: Any, fallback: str) -> str:
        if isinstance(path, str) and path.strip():
            return f"{self._base_url}/{path.strip().lstrip('/')}"
        return f"{self._base_url}{fallback}"

    def get_category_tree(self, taxonomy_id: int) -> List[Category]:
        terms = self._taxonomies.get(str(taxonomy_id))
        if terms is None:
            _LOGGER.warning("Taxonomy %s not present in snapshot", taxonomy_id)
            return []
        categories = []
        for term in terms:
            term_id = _as_int(term.get("id"))
            if term_id is None:
                raise SnapshotFormatError(f"Taxonomy term without a numeric id: {term!r}")
            categories.append(
                Category(
                    id=term_id,
                    name=str(term.get("name") or ""),
                    url=self._url(term.get("path"), f"/taxonomy/term/{term_id}"),
                )
            )
        return categories

    def query_content_by_category(
        self,
        category_id: int,
        *,
        published_only: bool = True,
        limit: Optional[int] = None,
    ) -> List[int]:
        handles = []
        for record_id, raw in self._records.items():
            if published_only and not _is_published(raw):
                continue
            tagged = _int_list(raw.get("terms"))
            if category_id not in tagged and _as_int(raw.get("primary_category")) != category_id:
                continue
            handles.append(record_id)
            if limit is not None and len(handles) >= limit:
                break
        return handles

    def load_content_record(self, handle: int) -> ContentRecord:
        raw = self._records.get(handle)
        if raw is None:
            raise RepositoryError(f"Unknown content record {handle}", handle=handle)
        keywords = [
            Term(id=term_id, name=self._terms.get(str(term_id), ""))
            for term_id in _int_list(raw.get("keywords"))
        ]
        return ContentRecord(
            id=handle,
            url=self._url(raw.get("path"), f"/node/{handle}"),
            title=_first_value(raw.get("title")) or "",
            code=(_first_value(raw.get("code")) or "").strip(),
            body=_first_value(raw.get("body")),
            topic_content=_first_value(raw.get("topic_content")),
            bibliography=_first_value(raw.get("bibliography")),
            learning_objectives=_first_value(raw.get("learning_objectives")),
            primary_category=_as_int(raw.get("primary_category")),
            keywords=keywords,
        )


__all__ = ["SnapshotRepository"]
