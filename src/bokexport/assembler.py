"""Walk the knowledge area taxonomy and assemble the export graph."""

from __future__ import annotations

import logging
import re
from functools import partial
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .config import ExportSettings
from .models import (
    BibliographicReference,
    Category,
    ContentRecord,
    Keyword,
    LearningOutcome,
    Link,
    Node,
)
from .registry import DedupRegistry, text_key
from .repository import ContentRepository
from .richtext import list_items, split_paragraphs
from .sanitize import normalize

_LOGGER = logging.getLogger(__name__)

ROOT_NODE_ID = 0


@dataclass(slots=True)
class ExportOptions:
    """Per-run switches supplied on the command line."""

    limit: Optional[int] = None
    strip: bool = False
    category_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 1:
            raise ValueError("limit must be a positive integer")


@dataclass(slots=True)
class ExportGraph:
    """Everything collected during one export pass."""

    nodes: List[Node] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    keywords: DedupRegistry[int, Keyword] = field(default_factory=DedupRegistry)
    learning_outcomes: DedupRegistry[str, LearningOutcome] = field(default_factory=DedupRegistry)
    references: DedupRegistry[str, BibliographicReference] = field(default_factory=DedupRegistry)
    statistics: Dict[str, int] = field(
        default_factory=lambda: {
            "categories": 0,
            "records_seen": 0,
            "records_exported": 0,
            "skipped_duplicate_code": 0,
            "skipped_superseded": 0,
            "skipped_legacy_code": 0,
            "failed_records": 0,
            "unlinked_records": 0,
        }
    )


@dataclass(slots=True)
class _StagedRecord:
    """A topic whose derived fields are computed but not yet committed."""

    record: ContentRecord
    definition: str
    references: List[str]
    outcomes: List[str]


class GraphAssembler:
    """Flatten the two-level taxonomy and its topics into nodes and links.

    Node ids are handed out in visitation order: 0 for the root, then each
    knowledge area followed by its accepted topics. A topic is staged in full
    before it receives an id, so a record that fails midway leaves no partial
    state behind.
    """

    def __init__(
        self,
        repository: ContentRepository,
        settings: ExportSettings,
        options: Optional[ExportOptions] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._repository = repository
        self._settings = settings
        self._options = options or ExportOptions()
        self._logger = logger or _LOGGER
        self._legacy_code = re.compile(settings.legacy_code_pattern)
        self._next_id = ROOT_NODE_ID
        self._category_nodes: Dict[int, int] = {}
        self._seen_codes: Set[str] = set()

    def assemble(self) -> ExportGraph:
        graph = ExportGraph()
        self._next_id = ROOT_NODE_ID
        self._category_nodes.clear()
        self._seen_codes.clear()

        graph.nodes.append(Node(id=self._allocate_id(), title=self._settings.site_name))

        for category in self._repository.get_category_tree(self._settings.taxonomy_id):
            if self._options.category_id is not None and category.id != self._options.category_id:
                continue
            self._visit_category(graph, category)

        self._logger.info(
            "Assembled %d nodes and %d links from %d knowledge areas",
            len(graph.nodes),
            len(graph.links),
            graph.statistics["categories"],
        )
        return graph

    def _allocate_id(self) -> int:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def _link(self, source: int, target: int) -> Link:
        return Link(
            source=source,
            target=target,
            relation=self._settings.relation_uri,
            relation_name=self._settings.relation_name,
        )

    def _visit_category(self, graph: ExportGraph, category: Category) -> None:
        node_id = self._allocate_id()
        self._category_nodes[category.id] = node_id
        graph.links.append(self._link(node_id, ROOT_NODE_ID))
        graph.nodes.append(
            Node(id=node_id, title=category.name, source_id=category.id, name=category.url)
        )
        graph.statistics["categories"] += 1
        self._logger.info("Exporting knowledge area %s (%s)", category.name, category.id)

        accepted = 0
        limit = self._options.limit
        for handle in self._repository.query_content_by_category(category.id, published_only=True):
            if limit is not None and accepted >= limit:
                break
            graph.statistics["records_seen"] += 1
            try:
                record = self._repository.load_content_record(handle)
                if self._skip_reason(graph, record):
                    continue
                staged = self._stage(record)
            except Exception:
                graph.statistics["failed_records"] += 1
                self._logger.warning("Skipping content record %s after an error", handle, exc_info=True)
                continue
            self._commit(graph, staged)
            accepted += 1

    def _skip_reason(self, graph: ExportGraph, record: ContentRecord) -> Optional[str]:
        code = record.code
        reason = None
        if code and code in self._seen_codes:
            reason = "duplicate_code"
        elif any(marker in record.url for marker in self._settings.superseded_url_markers):
            reason = "superseded"
        elif code and self._legacy_code.search(code):
            reason = "legacy_code"
        if reason:
            graph.statistics[f"skipped_{reason}"] += 1
            self._logger.debug("Skipping %s (%s): %s", record.id, code or "no code", reason)
        return reason

    def _stage(self, record: ContentRecord) -> _StagedRecord:
        return _StagedRecord(
            record=record,
            definition=normalize(record.body),
            references=split_paragraphs(record.bibliography),
            outcomes=list_items(record.learning_objectives),
        )

    def _commit(self, graph: ExportGraph, staged: _StagedRecord) -> None:
        record = staged.record
        node_id = self._allocate_id()
        if record.code:
            self._seen_codes.add(record.code)

        for term in record.keywords:
            graph.keywords.upsert(term.id, partial(Keyword, id=term.id, name=term.name), node_id)

        graph.nodes.append(
            Node(
                id=node_id,
                title=record.title,
                source_id=record.id,
                code=record.code or None,
                name=record.url,
                definition=staged.definition,
                content=record.topic_content,
            )
        )

        for entry in staged.references:
            graph.references.upsert(
                text_key(entry), partial(BibliographicReference, reference=entry), node_id
            )

        category_node = self._category_nodes.get(record.primary_category)
        if category_node is not None:
            graph.links.append(self._link(node_id, category_node))
        else:
            graph.statistics["unlinked_records"] += 1
            self._logger.warning(
                "Topic %s has no known knowledge area (%s); exported without a hierarchy link",
                record.id,
                record.primary_category,
            )

        for outcome in staged.outcomes:
            graph.learning_outcomes.upsert(
                text_key(outcome), partial(LearningOutcome, text=outcome), node_id
            )

        graph.statistics["records_exported"] += 1


__all__ = ["ExportGraph", "ExportOptions", "GraphAssembler", "ROOT_NODE_ID"]
