"""Data records flowing through the export pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Node:
    """Graph vertex for the root, a knowledge area or a topic."""

    id: int
    title: str
    source_id: Optional[int] = None
    code: Optional[str] = None
    name: Optional[str] = None
    definition: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Link:
    """Directed hierarchy edge between two nodes."""

    source: int
    target: int
    relation: str
    relation_name: str


@dataclass(slots=True)
class Keyword:
    """Keyword term shared by topics, keyed by its taxonomy term id."""

    id: int
    name: str
    is_keyword_of: List[int] = field(default_factory=list)

    @property
    def backlinks(self) -> List[int]:
        return self.is_keyword_of


@dataclass(slots=True)
class LearningOutcome:
    """Learning objective list item, keyed by the hash of its text."""

    text: str
    is_learning_outcome_of: List[int] = field(default_factory=list)

    @property
    def backlinks(self) -> List[int]:
        return self.is_learning_outcome_of


@dataclass(slots=True)
class BibliographicReference:
    """Bibliography entry, keyed by the hash of its text."""

    reference: str
    is_reference_of: List[int] = field(default_factory=list)

    @property
    def backlinks(self) -> List[int]:
        return self.is_reference_of


@dataclass(frozen=True, slots=True)
class Category:
    """Knowledge area term as returned by the repository."""

    id: int
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class Term:
    """Keyword term reference carried by a content record."""

    id: int
    name: str


@dataclass(slots=True)
class ContentRecord:
    """Loaded topic with the fields the exporter reads."""

    id: int
    url: str
    title: str
    code: str = ""
    body: Optional[str] = None
    topic_content: Optional[str] = None
    bibliography: Optional[str] = None
    learning_objectives: Optional[str] = None
    primary_category: Optional[int] = None
    keywords: List[Term] = field(default_factory=list)


__all__ = [
    "BibliographicReference",
    "Category",
    "ContentRecord",
    "Keyword",
    "LearningOutcome",
    "Link",
    "Node",
    "Term",
]
