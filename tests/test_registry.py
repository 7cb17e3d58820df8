from __future__ import annotations

from functools import partial

from bokexport.models import Keyword, LearningOutcome
from bokexport.registry import DedupRegistry, text_key


def test_upsert_creates_once_and_appends_backlinks() -> None:
    registry: DedupRegistry[int, Keyword] = DedupRegistry()
    created = []

    def factory() -> Keyword:
        keyword = Keyword(id=42, name="Geodesy")
        created.append(keyword)
        return keyword

    registry.upsert(42, factory, 2)
    registry.upsert(42, factory, 5)

    assert len(created) == 1
    assert len(registry) == 1
    assert registry.all()[0].is_keyword_of == [2, 5]


def test_upsert_keeps_duplicate_backlinks() -> None:
    registry: DedupRegistry[int, Keyword] = DedupRegistry()
    for _ in range(2):
        registry.upsert(42, partial(Keyword, id=42, name="Geodesy"), 3)

    assert registry.get(42).is_keyword_of == [3, 3]


def test_all_preserves_first_insertion_order() -> None:
    registry: DedupRegistry[str, LearningOutcome] = DedupRegistry()
    for node_id, text in [(2, "b"), (3, "a"), (4, "b"), (5, "c")]:
        registry.upsert(text_key(text), partial(LearningOutcome, text=text), node_id)

    assert [outcome.text for outcome in registry.all()] == ["b", "a", "c"]
    assert registry.get(text_key("b")).is_learning_outcome_of == [2, 4]
    assert text_key("a") in registry


def test_text_key_ignores_surrounding_whitespace() -> None:
    assert text_key("  Learn X \n") == text_key("Learn X")
    assert text_key("Learn X") != text_key("Learn Y")
