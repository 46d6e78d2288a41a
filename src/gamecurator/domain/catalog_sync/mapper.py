"""Field mapping between game records and catalog entries.

Export formatting is deterministic so an unchanged store always renders the
same entry: ISO-8601 dates in UTC, ``true``/``false`` booleans, ``;``-joined
genres and XML-invalid characters removed.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from gamecurator.domain.model import CanonicalIdField, Language

if TYPE_CHECKING:
    from gamecurator.domain.model import CatalogEntry, GameRecord

log = getLogger(__name__)

GENRE_SEPARATOR: Final[str] = ";"
CANONICAL_ID_CUSTOM_FIELD: Final[str] = "canonicalId"
ENGINE_CUSTOM_FIELD: Final[str] = "engine"

# XML 1.0 forbids most control characters; U+FFFD marks an earlier decoding failure.
_INVALID_XML_CHARS: Final = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffc\U00010000-\U0010ffff]"
)
_LONG_FRACTION: Final = re.compile(r"(\.\d{6})\d+")
_NEVER_PLAYED_YEAR: Final[int] = 1800


def clean_text(value: str | None) -> str:
    if not value:
        return ""
    return _INVALID_XML_CHARS.sub("", value)


def format_bool(value: bool) -> str:  # noqa: FBT001
    return "true" if value else "false"


def parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return ""
    aware = value if value.tzinfo else value.replace(tzinfo=UTC)
    return aware.astimezone(UTC).isoformat()


def parse_datetime(value: str) -> datetime | None:
    """Parse a catalog timestamp; fractions beyond microseconds are truncated."""

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _LONG_FRACTION.sub(r"\1", text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        log.warning("Ignoring unparseable catalog date %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_played_date(value: str) -> datetime | None:
    played = parse_datetime(value)
    if played is None or played.year <= _NEVER_PLAYED_YEAR:
        return None
    return played


def format_float(value: float | None) -> str:
    if value is None:
        return "0"
    return f"{value:g}"


def parse_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def parse_int(value: str) -> int | None:
    try:
        return int(float(value))
    except ValueError:
        return None


class CatalogMapper:
    """Translates records to catalog fields and catalog edits back to records."""

    def __init__(
        self,
        *,
        platform: str,
        canonical_id_field: CanonicalIdField = CanonicalIdField.SORT_TITLE,
        preferred_language: Language = Language.EN,
    ) -> None:
        self.platform = platform
        self.canonical_id_field = canonical_id_field
        self.preferred_language = preferred_language

    @property
    def carries_id_in_custom_field(self) -> bool:
        return self.canonical_id_field is CanonicalIdField.CUSTOM_FIELD

    def canonical_id_of(self, entry: CatalogEntry) -> str:
        """Canonical id carried by a native field; empty for the custom-field mode."""

        if self.carries_id_in_custom_field:
            return ""
        return entry.get(self.canonical_id_field.value)

    def to_catalog_fields(self, record: GameRecord) -> dict[str, str]:
        language = self.preferred_language
        fields = {
            "Title": clean_text(record.localized(record.name_by_language, language)),
            "Notes": clean_text(record.localized(record.description_by_language, language)),
            "Developer": clean_text(record.localized(record.maker_by_language, language)),
            "Genre": clean_text(
                GENRE_SEPARATOR.join(record.localized_list(record.genres_by_language, language))
            ),
            "Platform": clean_text(self.platform),
            "Completed": format_bool(record.completed),
            "DateAdded": format_datetime(record.date_added),
            "DateModified": format_datetime(record.date_modified),
            "ReleaseDate": format_datetime(record.release_date),
            "Favorite": format_bool(record.favorite),
            "Rating": clean_text(record.rating),
            "StarRatingFloat": format_float(record.stars),
            "StarRating": str(int(record.stars or 0)),
            "CommunityStarRating": format_float(record.community_stars),
            "CommunityStarRatingTotalVotes": str(record.community_star_votes or 0),
            "Version": clean_text(record.version),
            "Series": clean_text(record.series),
            "Portable": format_bool(record.portable),
            "Hide": format_bool(record.hide),
            "Broken": format_bool(record.broken),
            "ApplicationPath": clean_text(record.executable_file),
            "RootFolder": clean_text(record.directory),
        }
        if self.canonical_id_field is not CanonicalIdField.SOURCE:
            fields["Source"] = clean_text(record.source_name)
        if not self.carries_id_in_custom_field:
            fields[self.canonical_id_field.value] = clean_text(record.canonical_id)
        return fields

    def initial_frontend_fields(self, record: GameRecord) -> dict[str, str]:
        """Frontend-owned values the store can seed a new entry with."""

        if record.last_played_date is None:
            return {}
        return {"LastPlayedDate": format_datetime(record.last_played_date)}

    def apply_catalog_entry(self, record: GameRecord, entry: CatalogEntry) -> None:
        """Copy catalog edits onto ``record``.

        Name, description and developer only fill empty preferred-language
        values; the user's language is unknown, so nothing the sources
        provided is replaced. Genres are taken from the catalog when it has any.
        """

        language = self.preferred_language
        for field_name, values in (
            ("Title", record.name_by_language),
            ("Notes", record.description_by_language),
            ("Developer", record.maker_by_language),
        ):
            catalog_value = entry.get(field_name)
            if catalog_value and not values.get(language):
                values[language] = catalog_value

        genres = entry.get("Genre")
        if genres:
            record.genres_by_language[language] = [
                genre for genre in genres.split(GENRE_SEPARATOR) if genre
            ]

        record.completed = parse_bool(entry.get("Completed"))
        record.favorite = parse_bool(entry.get("Favorite"))
        record.portable = parse_bool(entry.get("Portable"))
        record.hide = parse_bool(entry.get("Hide"))
        record.broken = parse_bool(entry.get("Broken"))

        record.date_added = parse_datetime(entry.get("DateAdded")) or record.date_added
        record.date_modified = parse_datetime(entry.get("DateModified")) or record.date_modified
        record.release_date = parse_datetime(entry.get("ReleaseDate")) or record.release_date
        record.last_played_date = (
            parse_played_date(entry.get("LastPlayedDate")) or record.last_played_date
        )

        record.rating = entry.get("Rating") or None
        record.stars = parse_float(entry.get("StarRatingFloat"))
        record.version = entry.get("Version") or None
        record.series = entry.get("Series") or None
        record.executable_file = entry.get("ApplicationPath") or None
        record.directory = entry.get("RootFolder") or None
