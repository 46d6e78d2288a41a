"""Bidirectional reconciliation between the game store and the frontend catalog.

Responsibilities of this stage:
- export: merge store records into the catalog without touching frontend-owned
  fields, assigning each record's external id exactly once
- import: copy catalog edits back onto known records, skipping entries that
  are neither modified nor played more recently than the store knows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

from gamecurator.domain.catalog_sync.mapper import (
    CANONICAL_ID_CUSTOM_FIELD,
    ENGINE_CUSTOM_FIELD,
    parse_datetime,
    parse_played_date,
)
from gamecurator.domain.catalog_sync.merge import (
    drop_custom_fields,
    merge_entry,
    new_entry,
    upsert_custom_field,
)
from gamecurator.domain.model import CatalogDocument, CustomField
from gamecurator.domain.ports import NullProgress

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime
    from pathlib import Path

    from gamecurator.domain.catalog_sync.mapper import CatalogMapper
    from gamecurator.domain.model import CatalogEntry, GameRecord
    from gamecurator.domain.ports import CatalogStore, GameUnitOfWork, ProgressReporter

log = getLogger(__name__)


def _new_external_id() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class ExportPlan:
    document: CatalogDocument
    assigned_ids: dict[str, str] = field(default_factory=dict)
    created: int = 0
    updated: int = 0
    removed: int = 0
    preserved: int = 0


@dataclass(slots=True)
class ExportResult:
    created: int = 0
    updated: int = 0
    removed: int = 0
    preserved: int = 0
    assigned_ids: int = 0
    backup_path: Path | None = None


@dataclass(slots=True)
class ImportResult:
    examined: int = 0
    updated: int = 0
    skipped_unknown: int = 0
    skipped_stale: int = 0


def _carrier_index(document: CatalogDocument, mapper: CatalogMapper) -> dict[str, str]:
    """Map canonical id to entry id through the configured carrier field."""

    index: dict[str, str] = {}
    if mapper.carries_id_in_custom_field:
        for custom in document.custom_fields:
            if custom.name == CANONICAL_ID_CUSTOM_FIELD and custom.value:
                index.setdefault(custom.value, custom.game_id)
        return index
    for entry in document.games:
        canonical_id = mapper.canonical_id_of(entry)
        if canonical_id and entry.id:
            index.setdefault(canonical_id, entry.id)
    return index


def plan_export(
    records: Iterable[GameRecord],
    existing: CatalogDocument | None,
    mapper: CatalogMapper,
    *,
    id_factory: Callable[[], str] = _new_external_id,
) -> ExportPlan:
    """Compute the next catalog document without side effects.

    Entries are found by the record's external id; a record that never had one
    may adopt an entry carrying its canonical id. Entries of deleted records are
    removed, entries no record matches are kept as they are.
    """

    document = existing or CatalogDocument()
    entries: list[CatalogEntry] = list(document.games)
    position = {entry.id: index for index, entry in enumerate(entries) if entry.id}
    custom_fields = document.custom_fields
    carriers = _carrier_index(document, mapper)

    claimed: set[str] = set()
    removed_ids: set[str] = set()
    assigned: dict[str, str] = {}
    created = updated = 0

    for record in sorted(records, key=lambda item: item.canonical_id):
        entry_id = _match_entry(record, position, carriers, claimed)

        if record.deleted:
            if entry_id is not None:
                removed_ids.add(entry_id)
                claimed.add(entry_id)
            continue

        incoming = mapper.to_catalog_fields(record)
        if entry_id is not None:
            entries[position[entry_id]] = merge_entry(entries[position[entry_id]], incoming)
            updated += 1
        else:
            entry_id = record.external_id or id_factory()
            entries.append(
                new_entry(entry_id, incoming, seed=mapper.initial_frontend_fields(record))
            )
            position[entry_id] = len(entries) - 1
            created += 1
        if record.external_id is None:
            assigned[record.canonical_id] = entry_id
        claimed.add(entry_id)

        if record.engine:
            custom_fields = upsert_custom_field(
                custom_fields, CustomField(entry_id, ENGINE_CUSTOM_FIELD, record.engine)
            )
        if mapper.carries_id_in_custom_field:
            custom_fields = upsert_custom_field(
                custom_fields, CustomField(entry_id, CANONICAL_ID_CUSTOM_FIELD, record.canonical_id)
            )

    kept = tuple(entry for entry in entries if entry.id not in removed_ids)
    preserved = sum(1 for entry in kept if entry.id not in claimed)
    return ExportPlan(
        document=CatalogDocument(
            games=kept,
            custom_fields=drop_custom_fields(custom_fields, removed_ids),
            passthrough=document.passthrough,
        ),
        assigned_ids=assigned,
        created=created,
        updated=updated,
        removed=len(removed_ids),
        preserved=preserved,
    )


def _match_entry(
    record: GameRecord,
    position: dict[str, int],
    carriers: dict[str, str],
    claimed: set[str],
) -> str | None:
    if record.external_id is not None:
        return record.external_id if record.external_id in position else None
    candidate = carriers.get(record.canonical_id)
    if candidate is not None and candidate in position and candidate not in claimed:
        return candidate
    return None


def export_to_catalog(
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    catalog_store: CatalogStore,
    mapper: CatalogMapper,
    id_factory: Callable[[], str] = _new_external_id,
    progress: ProgressReporter | None = None,
) -> ExportResult:
    """Write the store into the catalog document.

    New external ids are persisted record by record before the document is
    written, so an interrupted export reuses them next time. A failing store
    write propagates.
    """

    reporter = progress or NullProgress()
    with unit_of_work_factory() as uow:
        records = uow.repositories.games.list()

    existing = catalog_store.load()
    plan = plan_export(records, existing, mapper, id_factory=id_factory)

    reporter.start("Converting database to catalog", total=len(plan.assigned_ids))
    for canonical_id, external_id in plan.assigned_ids.items():
        with unit_of_work_factory() as uow:
            record = uow.repositories.games.get(canonical_id)
            if record is None:
                raise LookupError(f"Record {canonical_id} vanished during export")
            record.assign_external_id(external_id)
            uow.commit()
        reporter.advance(description=canonical_id)

    backup_path = catalog_store.backup() if existing is not None else None
    catalog_store.save(plan.document)
    reporter.finish(f"Exported {plan.created + plan.updated} games")

    log.info(
        "Export finished: created=%s, updated=%s, removed=%s, preserved=%s, backup=%s",
        plan.created,
        plan.updated,
        plan.removed,
        plan.preserved,
        backup_path,
    )
    return ExportResult(
        created=plan.created,
        updated=plan.updated,
        removed=plan.removed,
        preserved=plan.preserved,
        assigned_ids=len(plan.assigned_ids),
        backup_path=backup_path,
    )


def _aware(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def catalog_is_newer(entry: CatalogEntry, record: GameRecord) -> bool:
    """Whether the entry was modified or played after the store last saw it.

    Either timestamp suffices, so play activity is never lost to stale metadata.
    """

    modified = parse_datetime(entry.get("DateModified"))
    played = parse_played_date(entry.get("LastPlayedDate"))
    store_modified = _aware(record.date_modified)
    store_played = _aware(record.last_played_date)

    modified_newer = modified is not None and (store_modified is None or modified > store_modified)
    played_newer = played is not None and (store_played is None or played > store_played)
    return modified_newer or played_newer


def import_from_catalog(
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    catalog_store: CatalogStore,
    mapper: CatalogMapper,
    only_update_newer: bool = True,
    progress: ProgressReporter | None = None,
) -> ImportResult:
    """Copy catalog edits onto existing records; never creates records."""

    reporter = progress or NullProgress()
    result = ImportResult()
    document = catalog_store.load()
    if document is None:
        log.warning("Catalog document does not exist yet, nothing to import")
        return result

    canonical_by_entry = {
        entry_id: canonical_id
        for canonical_id, entry_id in _carrier_index(document, mapper).items()
    }

    reporter.start("Syncing catalog to database", total=len(document.games))
    for entry in document.games:
        result.examined += 1
        _import_entry(
            entry,
            canonical_by_entry.get(entry.id),
            unit_of_work_factory=unit_of_work_factory,
            mapper=mapper,
            only_update_newer=only_update_newer,
            result=result,
        )
        reporter.advance(description=entry.get("Title") or entry.id)
    reporter.finish(f"Updated {result.updated} games")

    log.info(
        "Import finished: examined=%s, updated=%s, unknown=%s, stale=%s",
        result.examined,
        result.updated,
        result.skipped_unknown,
        result.skipped_stale,
    )
    return result


def _import_entry(
    entry: CatalogEntry,
    carried_canonical_id: str | None,
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    mapper: CatalogMapper,
    only_update_newer: bool,
    result: ImportResult,
) -> None:
    with unit_of_work_factory() as uow:
        games = uow.repositories.games
        record = games.get_by_external_id(entry.id) if entry.id else None
        adopt = False
        if record is None and carried_canonical_id:
            candidate = games.get(carried_canonical_id)
            if candidate is not None and candidate.external_id is None:
                record = candidate
                adopt = True

        if record is None:
            log.debug("Entry %s does not exist in the store", entry.id)
            result.skipped_unknown += 1
            return

        if only_update_newer and not catalog_is_newer(entry, record):
            log.debug("Skipping %s, catalog data is not newer", record.canonical_id)
            result.skipped_stale += 1
            return

        if adopt:
            record.assign_external_id(entry.id)
        mapper.apply_catalog_entry(record, entry)
        uow.commit()
        result.updated += 1
