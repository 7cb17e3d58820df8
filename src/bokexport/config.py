"""Configuration for the Living Textbook export pipeline."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl, Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SKOS_BROADER = "http://www.w3.org/2004/02/skos/core#broader"


class ExportSettings(BaseSettings):
    """Settings model driven by environment variables.

    Environment variables are prefixed with ``BOKEXPORT_``. For example, set
    ``BOKEXPORT_SNAPSHOT_PATH=/srv/bok/snapshot.json`` to read a different
    repository snapshot.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOKEXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    site_name: str = Field(
        default="GIS&T Body of Knowledge",
        description="Title given to the synthetic root node of the exported graph.",
    )
    base_url: AnyHttpUrl = Field(
        default="https://gistbok.ucgis.org",
        description="Public site URL used to build canonical topic and knowledge area URLs.",
    )
    taxonomy_id: PositiveInt = Field(
        default=1,
        description="Vocabulary holding the knowledge area tree.",
    )
    snapshot_path: Path = Field(
        default_factory=lambda: Path("data") / "bok_snapshot.json",
        description="JSON snapshot of the content repository read by the exporter.",
    )
    relation_uri: str = Field(
        default=SKOS_BROADER,
        description="Relation URI attached to every hierarchy link.",
    )
    relation_name: str = Field(
        default="is subconcept of",
        description="Display name of the hierarchy relation.",
    )
    label_max_length: PositiveInt = Field(
        default=255,
        description="Maximum number of characters kept in a learning outcome label.",
    )
    superseded_url_markers: List[str] = Field(
        default_factory=lambda: ["/2006-"],
        description="URL fragments identifying topics of the superseded content batch.",
    )
    legacy_code_pattern: str = Field(
        default=r"^[A-Za-z]{2}\d+-\d+$",
        description="Regular expression matching topic codes of the prior edition (e.g. AM1-2).",
    )

    @field_validator("legacy_code_pattern")
    @classmethod
    def _validate_legacy_code_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"legacy_code_pattern is not a valid regular expression: {exc}") from exc
        return value

    def canonical_base(self) -> str:
        """Return the base URL without a trailing slash."""

        return str(self.base_url).rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> ExportSettings:
    """Return a cached ``ExportSettings`` instance."""

    return ExportSettings()


__all__ = ["ExportSettings", "SKOS_BROADER", "get_settings"]
