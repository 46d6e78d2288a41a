"""Pure merge functions between store-derived fields and catalog entries."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from gamecurator.domain.model import ENTRY_ID_FIELD, CatalogEntry, CustomField

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

NEVER_PLAYED: Final[str] = "1800-01-01T00:00:00"

# Fields the frontend manages. Written once with these defaults when an entry is
# created and never overwritten by an export afterwards.
FRONTEND_OWNED_DEFAULTS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "PlayCount": "0",
        "PlayTime": "0",
        "LastPlayedDate": NEVER_PLAYED,
        "CommandLine": "",
        "ConfigurationCommandLine": "",
        "ConfigurationPath": "",
        "DosBoxConfigurationPath": "",
        "Emulator": "",
        "ManualPath": "",
        "MusicPath": "",
        "Publisher": "",
        "ScummVMAspectCorrection": "false",
        "ScummVMFullscreen": "false",
        "ScummVMGameDataFolderPath": "",
        "ScummVMGameType": "",
        "UseDosBox": "false",
        "UseScummVM": "false",
        "PlayMode": "",
        "Region": "",
        "VideoPath": "",
        "MissingVideo": "true",
        "MissingBoxFrontImage": "false",
        "MissingScreenshotImage": "false",
        "MissingClearLogoImage": "false",
        "MissingBackgroundImage": "false",
        "UseStartupScreen": "false",
        "HideAllNonExclusiveFullscreenWindows": "false",
        "StartupLoadDelay": "0",
        "HideMouseCursorInGame": "false",
        "DisableShutdownScreen": "false",
        "AggressiveWindowHiding": "false",
        "OverrideDefaultStartupScreenSettings": "false",
        "UsePauseScreen": "false",
        "OverrideDefaultPauseScreenSettings": "false",
        "SuspendProcessOnPause": "false",
        "ForcefulPauseScreenActivation": "false",
        "CustomDosBoxVersionPath": "",
    }
)

FRONTEND_OWNED_FIELDS: Final[frozenset[str]] = frozenset(FRONTEND_OWNED_DEFAULTS)


def _store_owned(incoming: Mapping[str, str], frontend_owned: frozenset[str]) -> dict[str, str]:
    return {
        name: value
        for name, value in incoming.items()
        if name not in frontend_owned and name != ENTRY_ID_FIELD
    }


def merge_entry(
    existing: CatalogEntry,
    incoming: Mapping[str, str],
    frontend_owned: frozenset[str] = FRONTEND_OWNED_FIELDS,
) -> CatalogEntry:
    """Return ``existing`` with the store's fields applied.

    Frontend-owned fields and fields the store does not produce keep their
    current values; the entry id never changes.
    """

    return existing.with_fields(_store_owned(incoming, frontend_owned))


def new_entry(
    entry_id: str,
    incoming: Mapping[str, str],
    *,
    defaults: Mapping[str, str] = FRONTEND_OWNED_DEFAULTS,
    seed: Mapping[str, str] | None = None,
) -> CatalogEntry:
    """Build an entry from the store's fields plus a default for every frontend-owned field.

    ``seed`` overrides individual defaults with values the store already knows,
    such as the last played date of a record whose entry was lost.
    """

    fields = {ENTRY_ID_FIELD: entry_id}
    fields.update(_store_owned(incoming, frozenset(defaults)))
    overrides = seed or {}
    for name, default in defaults.items():
        fields[name] = overrides.get(name, default)
    return CatalogEntry(fields)


def upsert_custom_field(
    custom_fields: Iterable[CustomField],
    field: CustomField,
) -> tuple[CustomField, ...]:
    """Replace the field with the same ``(game_id, name)`` in place, or append it."""

    result: list[CustomField] = []
    replaced = False
    for existing in custom_fields:
        if existing.key == field.key:
            if not replaced:
                result.append(field)
                replaced = True
            continue
        result.append(existing)
    if not replaced:
        result.append(field)
    return tuple(result)


def drop_custom_fields(
    custom_fields: Iterable[CustomField],
    game_ids: set[str],
) -> tuple[CustomField, ...]:
    return tuple(custom for custom in custom_fields if custom.game_id not in game_ids)
