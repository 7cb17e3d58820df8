from __future__ import annotations

import json
from pathlib import Path

import pytest

from bokexport.errors import RepositoryError, SnapshotFormatError
from bokexport.repository import SnapshotRepository

FIXTURE = Path(__file__).parent / "data" / "bok" / "snapshot.json"
BASE_URL = "https://bok.example.org/"


@pytest.fixture()
def repository() -> SnapshotRepository:
    return SnapshotRepository.from_path(FIXTURE, base_url=BASE_URL)


def test_category_tree_preserves_order_and_builds_urls(repository: SnapshotRepository) -> None:
    categories = repository.get_category_tree(1)

    assert [category.id for category in categories] == [7, 8]
    assert categories[0].url == "https://bok.example.org/knowledge-area/cartography-and-visualization"
    assert categories[1].url == "https://bok.example.org/taxonomy/term/8"


def test_unknown_taxonomy_is_empty(repository: SnapshotRepository) -> None:
    assert repository.get_category_tree(99) == []


def test_query_filters_unpublished_records(repository: SnapshotRepository) -> None:
    assert repository.query_content_by_category(7) == [101]
    assert repository.query_content_by_category(7, published_only=False) == [101, 102]
    assert repository.query_content_by_category(8) == [103, 104]


def test_query_honours_limit(repository: SnapshotRepository) -> None:
    assert repository.query_content_by_category(8, limit=1) == [103]


def test_query_matches_indexed_terms(repository: SnapshotRepository) -> None:
    assert repository.query_content_by_category(42) == [101, 103]


def test_load_content_record(repository: SnapshotRepository) -> None:
    record = repository.load_content_record(101)

    assert record.url == "https://bok.example.org/topic/cv-01"
    assert record.code == "CV-01"
    assert record.title == "Map Projections"
    assert record.body == "<p>How maps flatten the globe.</p>"
    assert record.primary_category == 7
    assert [(term.id, term.name) for term in record.keywords] == [(42, "Geodesy"), (43, "Map projections")]


def test_load_content_record_tolerates_missing_fields(repository: SnapshotRepository) -> None:
    record = repository.load_content_record(102)

    assert record.body is None
    assert record.bibliography is None
    assert record.learning_objectives is None
    assert record.keywords == []


def test_unknown_handle_raises(repository: SnapshotRepository) -> None:
    with pytest.raises(RepositoryError) as excinfo:
        repository.load_content_record(999)
    assert excinfo.value.handle == 999


def test_missing_snapshot_raises(tmp_path: Path) -> None:
    with pytest.raises(RepositoryError):
        SnapshotRepository.from_path(tmp_path / "missing.json", base_url=BASE_URL)


def test_invalid_snapshot_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotFormatError):
        SnapshotRepository.from_path(path, base_url=BASE_URL)


def test_records_must_be_a_list(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"records": {"id": 1}}), encoding="utf-8")
    with pytest.raises(SnapshotFormatError):
        SnapshotRepository.from_path(path, base_url=BASE_URL)


def test_unknown_keyword_resolves_to_empty_name() -> None:
    repository = SnapshotRepository(
        {"records": [{"id": 1, "title": "T", "keywords": [5, "x"]}]},
        base_url=BASE_URL,
    )
    record = repository.load_content_record(1)
    assert [(term.id, term.name) for term in record.keywords] == [(5, "")]
