"""Canonical store entity for one game directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import Language

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class GameRecord:
    """A title in the canonical store.

    ``canonical_id`` is the directory/catalog code and never changes once set.
    ``external_id`` is the join key into the frontend catalog; it is assigned
    once, on first export, and never regenerated.
    """

    canonical_id: str
    external_id: str | None = None

    name_by_language: dict[Language, str] = field(default_factory=dict)
    description_by_language: dict[Language, str] = field(default_factory=dict)
    genres_by_language: dict[Language, list[str]] = field(default_factory=dict)
    tags_by_language: dict[Language, list[str]] = field(default_factory=dict)
    maker_by_language: dict[Language, str] = field(default_factory=dict)
    image_urls: dict[Language, str] = field(default_factory=dict)

    release_date: datetime | None = None
    date_added: datetime | None = None
    date_modified: datetime | None = None
    last_played_date: datetime | None = None

    rating: str | None = None
    stars: float | None = None
    community_stars: float | None = None
    community_star_votes: int | None = None
    series: str | None = None
    version: str | None = None
    source_name: str | None = None
    engine: str | None = None
    executable_file: str | None = None
    directory: str | None = None

    completed: bool = False
    favorite: bool = False
    portable: bool = False
    hide: bool = False
    broken: bool = False
    deleted: bool = False

    force_source_update: bool = False
    force_executable_update: bool = False
    force_additional_images_update: bool = False
    source_missing_jp: bool = False
    source_missing_en: bool = False

    def assign_external_id(self, value: str) -> None:
        """Set the catalog join key; a different value is never accepted later."""

        if self.external_id is not None and self.external_id != value:
            raise ValueError(
                f"External id of {self.canonical_id} is already {self.external_id}, "
                f"refusing to change it to {value}"
            )
        self.external_id = value

    def localized(self, values: dict[Language, str], preferred: Language) -> str:
        """Return the preferred-language value, falling back to any other language."""

        preferred_value = values.get(preferred)
        if preferred_value:
            return preferred_value
        for language in Language:
            fallback = values.get(language)
            if fallback:
                return fallback
        return ""

    def localized_list(self, values: dict[Language, list[str]], preferred: Language) -> list[str]:
        preferred_values = values.get(preferred)
        if preferred_values:
            return list(preferred_values)
        for language in Language:
            fallback = values.get(language)
            if fallback:
                return list(fallback)
        return []

    def has_name(self) -> bool:
        return any(self.name_by_language.values())


@dataclass(frozen=True, slots=True, kw_only=True)
class GameMetadata:
    """Metadata a locator fetched for one canonical id."""

    source_name: str
    name_by_language: dict[Language, str] = field(default_factory=dict)
    description_by_language: dict[Language, str] = field(default_factory=dict)
    genres_by_language: dict[Language, list[str]] = field(default_factory=dict)
    tags_by_language: dict[Language, list[str]] = field(default_factory=dict)
    maker_by_language: dict[Language, str] = field(default_factory=dict)
    image_urls: dict[Language, str] = field(default_factory=dict)
    release_date: datetime | None = None
    community_stars: float | None = None
    community_star_votes: int | None = None
    series: str | None = None

    def languages(self) -> set[Language]:
        """Languages the source could provide a name for."""

        return {language for language, value in self.name_by_language.items() if value}
