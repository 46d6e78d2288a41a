"""Enrich store records with metadata fetched from their locator."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from gamecurator.domain.model import Language
from gamecurator.domain.ports import LocatorError, NullProgress

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from gamecurator.domain.model import GameMetadata, GameRecord
    from gamecurator.domain.ports import GameUnitOfWork, LocatorRegistry, ProgressReporter

log = getLogger(__name__)

DEFAULT_CONCURRENCY = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class DownloadResult:
    examined: int = 0
    fetched: int = 0
    skipped: int = 0
    unclaimed: int = 0
    failed: int = 0


@dataclass(frozen=True, slots=True)
class _Pending:
    canonical_id: str
    directory: Path | None


def needs_source(record: GameRecord) -> bool:
    """No name yet or a forced refresh, unless the source already lacked both languages."""

    if record.force_source_update:
        return True
    if record.source_missing_en and record.source_missing_jp:
        return False
    return not record.has_name()


def apply_metadata(
    record: GameRecord,
    metadata: GameMetadata | None,
    *,
    source_name: str,
    timestamp: datetime,
) -> None:
    """Overlay fetched values on ``record`` and flag languages the source lacks."""

    record.source_name = source_name
    record.force_source_update = False
    record.date_modified = timestamp
    languages = metadata.languages() if metadata else set()
    record.source_missing_en = Language.EN not in languages
    record.source_missing_jp = Language.JP not in languages
    if metadata is None:
        return

    for target, fetched in (
        (record.name_by_language, metadata.name_by_language),
        (record.description_by_language, metadata.description_by_language),
        (record.maker_by_language, metadata.maker_by_language),
        (record.image_urls, metadata.image_urls),
    ):
        for language, value in fetched.items():
            if value:
                target[language] = value
    for list_target, list_fetched in (
        (record.genres_by_language, metadata.genres_by_language),
        (record.tags_by_language, metadata.tags_by_language),
    ):
        for language, values in list_fetched.items():
            if values:
                list_target[language] = list(values)

    if metadata.release_date is not None:
        record.release_date = metadata.release_date
    if metadata.community_stars is not None:
        record.community_stars = metadata.community_stars
    if metadata.community_star_votes is not None:
        record.community_star_votes = metadata.community_star_votes
    if metadata.series:
        record.series = metadata.series


async def download_sources_async(
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    registry: LocatorRegistry,
    concurrency: int = DEFAULT_CONCURRENCY,
    now: Callable[[], datetime] = _utcnow,
    progress: ProgressReporter | None = None,
) -> DownloadResult:
    reporter = progress or NullProgress()
    result = DownloadResult()
    semaphore = asyncio.Semaphore(concurrency)

    pending: list[_Pending] = []
    with unit_of_work_factory() as uow:
        for record in uow.repositories.games.list(include_deleted=False):
            result.examined += 1
            if needs_source(record):
                pending.append(
                    _Pending(
                        canonical_id=record.canonical_id,
                        directory=Path(record.directory) if record.directory else None,
                    )
                )
            else:
                result.skipped += 1

    async def process(item: _Pending) -> None:
        try:
            await fetch_one(item)
        finally:
            reporter.advance(description=item.canonical_id)

    async def fetch_one(item: _Pending) -> None:
        locator = registry.for_canonical_id(item.canonical_id)
        if locator is None:
            log.debug("No locator claims %s", item.canonical_id)
            result.unclaimed += 1
            return
        async with semaphore:
            try:
                metadata = await locator.fetch_metadata(item.canonical_id, item.directory)
            except LocatorError as exc:
                log.warning("Could not fetch %s from %s: %s", item.canonical_id, locator.name, exc)
                result.failed += 1
                return
        with unit_of_work_factory() as uow:
            record = uow.repositories.games.get(item.canonical_id)
            if record is None:
                return
            apply_metadata(record, metadata, source_name=locator.name, timestamp=now())
            uow.commit()
        result.fetched += 1

    reporter.start("Downloading sources", total=len(pending))
    async with registry:
        await asyncio.gather(*(process(item) for item in pending))
    reporter.finish(f"Fetched {result.fetched} sources")
    log.info(
        "Source download finished: examined=%s, fetched=%s, skipped=%s, unclaimed=%s, failed=%s",
        result.examined,
        result.fetched,
        result.skipped,
        result.unclaimed,
        result.failed,
    )
    return result


def download_sources(
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    registry: LocatorRegistry,
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressReporter | None = None,
) -> DownloadResult:
    return asyncio.run(
        download_sources_async(
            unit_of_work_factory=unit_of_work_factory,
            registry=registry,
            concurrency=concurrency,
            progress=progress,
        )
    )


def set_force_update(
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    canonical_ids: Iterable[str] | None = None,
    source: bool = False,
    executable: bool = False,
    images: bool = False,
) -> int:
    """Flag records for a refresh on the next scan or download; returns how many matched."""

    if not (source or executable or images):
        raise ValueError("Select at least one of source, executable or images")

    wanted = set(canonical_ids) if canonical_ids is not None else None
    updated = 0
    with unit_of_work_factory() as uow:
        for record in uow.repositories.games.list(include_deleted=False):
            if wanted is not None and record.canonical_id not in wanted:
                continue
            record.force_source_update = record.force_source_update or source
            record.force_executable_update = record.force_executable_update or executable
            record.force_additional_images_update = (
                record.force_additional_images_update or images
            )
            updated += 1
        uow.commit()
    if wanted is not None and updated < len(wanted):
        log.warning("%s of the requested records do not exist", len(wanted) - updated)
    return updated
