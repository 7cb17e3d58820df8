"""Flatten export records into the Living Textbook import document."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .assembler import ExportGraph
from .models import BibliographicReference, Keyword, LearningOutcome, Link, Node
from .sanitize import sanitize

DEFAULT_LABEL_MAX_LENGTH = 255


def decorated_title(node: Node) -> str:
    if node.code:
        return f"[{node.code}] {node.title}"
    return node.title


def serialize_node(node: Node, *, strip: bool = False) -> Dict[str, Any]:
    content = sanitize(node.content) if strip else (node.content or "")
    return {
        "id": node.id,
        "sourceId": node.source_id,
        "code": sanitize(node.code),
        "title": sanitize(decorated_title(node)),
        "name": sanitize(node.name),
        "definition": sanitize(node.definition),
        "content": content,
    }


def serialize_link(link: Link) -> Dict[str, Any]:
    return {
        "relation": link.relation,
        "relationName": link.relation_name,
        "source": link.source,
        "target": link.target,
    }


def serialize_learning_outcome(
    outcome: LearningOutcome, *, label_max_length: int = DEFAULT_LABEL_MAX_LENGTH
) -> Dict[str, Any]:
    # The label is cut from the raw text, the definition is derived from the
    # full text; neither is computed from the other.
    return {
        "label": sanitize(outcome.text[:label_max_length]),
        "definition": sanitize(outcome.text),
        "isLearningOutcomeOf": list(outcome.is_learning_outcome_of),
    }


def serialize_keyword(keyword: Keyword) -> Dict[str, Any]:
    return {
        "id": keyword.id,
        "name": sanitize(keyword.name),
        "isKeywordOf": list(keyword.is_keyword_of),
    }


def serialize_reference(reference: BibliographicReference) -> Optional[Dict[str, Any]]:
    """Return the external resource entry, or ``None`` when the text sanitizes to nothing."""

    name = sanitize(reference.reference)
    if not name.strip():
        return None
    return {
        "name": name,
        "description": "",
        "url": "",
        "isReferenceOf": list(dict.fromkeys(reference.is_reference_of)),
    }


def serialize_references(references: Iterable[BibliographicReference]) -> List[Dict[str, Any]]:
    entries = []
    for reference in references:
        entry = serialize_reference(reference)
        if entry is not None:
            entries.append(entry)
    return entries


def build_document(
    graph: ExportGraph,
    *,
    strip: bool = False,
    label_max_length: int = DEFAULT_LABEL_MAX_LENGTH,
) -> Dict[str, List[Dict[str, Any]]]:
    """Return the export document with every collection present, possibly empty."""

    return {
        "nodes": [serialize_node(node, strip=strip) for node in graph.nodes],
        "links": [serialize_link(link) for link in graph.links],
        "learning_outcomes": [
            serialize_learning_outcome(outcome, label_max_length=label_max_length)
            for outcome in graph.learning_outcomes.all()
        ],
        "keywords": [serialize_keyword(keyword) for keyword in graph.keywords.all()],
        "external_resources": serialize_references(graph.references.all()),
    }


__all__ = [
    "build_document",
    "decorated_title",
    "serialize_keyword",
    "serialize_learning_outcome",
    "serialize_link",
    "serialize_node",
    "serialize_reference",
    "serialize_references",
]
