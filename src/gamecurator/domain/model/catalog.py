"""Value types for the frontend catalog document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

ENTRY_ID_FIELD: Final[str] = "ID"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One ``Game`` element as an ordered, read-only field mapping."""

    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def id(self) -> str:
        return self.fields.get(ENTRY_ID_FIELD, "")

    def get(self, name: str, default: str = "") -> str:
        return self.fields.get(name, default)

    def with_fields(self, updates: Mapping[str, str]) -> CatalogEntry:
        """Return a copy with ``updates`` applied; new fields are appended in order."""

        merged = dict(self.fields)
        merged.update(updates)
        return CatalogEntry(merged)


@dataclass(frozen=True, slots=True)
class CustomField:
    """Sidecar key/value attached to a catalog entry, unique by ``(game_id, name)``."""

    game_id: str
    name: str
    value: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.game_id, self.name)


@dataclass(frozen=True, slots=True)
class CatalogDocument:
    """Whole platform file.

    ``passthrough`` keeps top-level elements the reconciler does not own
    (alternate names, additional applications, ...) as serialized XML.
    """

    games: tuple[CatalogEntry, ...] = ()
    custom_fields: tuple[CustomField, ...] = ()
    passthrough: tuple[str, ...] = ()
