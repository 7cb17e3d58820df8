from __future__ import annotations

import pytest
from pydantic import ValidationError

from bokexport import config


@pytest.fixture(autouse=True)
def clear_settings_cache():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_settings_defaults() -> None:
    settings = config.get_settings()

    assert settings.site_name == "GIS&T Body of Knowledge"
    assert settings.canonical_base() == "https://gistbok.ucgis.org"
    assert settings.taxonomy_id == 1
    assert settings.relation_uri == config.SKOS_BROADER
    assert settings.relation_name == "is subconcept of"
    assert settings.label_max_length == 255
    assert settings.superseded_url_markers == ["/2006-"]
    assert config.get_settings() is settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOKEXPORT_SITE_NAME", "Test Site")
    monkeypatch.setenv("BOKEXPORT_TAXONOMY_ID", "4")
    monkeypatch.setenv("BOKEXPORT_SUPERSEDED_URL_MARKERS", '["/old/", "/legacy/"]')

    settings = config.get_settings()

    assert settings.site_name == "Test Site"
    assert settings.taxonomy_id == 4
    assert settings.superseded_url_markers == ["/old/", "/legacy/"]


def test_invalid_legacy_code_pattern_is_rejected() -> None:
    with pytest.raises(ValidationError):
        config.ExportSettings(legacy_code_pattern="[unclosed")
