"""Query every locator for each unsorted directory and record the candidates."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gamecurator.domain.identification.scoring import strip_tags_and_metadata
from gamecurator.domain.model import LocatorCodes, ResolutionState
from gamecurator.domain.ports import LocatorError, NullProgress

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.ports import (
        CandidateLocator,
        LocatorRegistry,
        ProgressReporter,
        ResolutionStateStore,
    )

log = getLogger(__name__)

DEFAULT_CONCURRENCY = 5


@dataclass(slots=True)
class GatherResult:
    examined: int = 0
    skipped: int = 0
    written: int = 0
    failed_lookups: int = 0


def list_unsorted_directories(unsorted_dir: Path) -> list[Path]:
    return sorted(path for path in unsorted_dir.iterdir() if path.is_dir())


def should_skip(
    directory: Path,
    *,
    registry: LocatorRegistry,
    state_store: ResolutionStateStore,
) -> bool:
    """Excluded (``!`` prefix), already canonical, or already gathered."""

    name = directory.name
    return name.startswith("!") or registry.claims(name) or state_store.exists(directory)


async def _lookup(
    locator: CandidateLocator,
    directory: Path,
    result: GatherResult,
) -> LocatorCodes:
    extracted = locator.extract_code(directory.name)
    try:
        found = await locator.search(strip_tags_and_metadata(directory.name))
    except LocatorError as exc:
        result.failed_lookups += 1
        log.warning("Lookup in %s failed for %s: %s", locator.name, directory.name, exc)
        found = []
    return LocatorCodes(extracted_code=extracted, found_codes=tuple(found))


async def gather_directory(
    directory: Path,
    *,
    registry: LocatorRegistry,
    result: GatherResult | None = None,
) -> ResolutionState:
    """Ask every locator about one directory, concurrently."""

    tally = result or GatherResult()
    locators = list(registry)
    codes = await asyncio.gather(*(_lookup(locator, directory, tally) for locator in locators))
    return ResolutionState(
        file=directory.name,
        codes={
            locator.name: locator_codes
            for locator, locator_codes in zip(locators, codes, strict=True)
        },
    )


async def gather_candidates_async(
    unsorted_dir: Path,
    *,
    registry: LocatorRegistry,
    state_store: ResolutionStateStore,
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressReporter | None = None,
) -> GatherResult:
    reporter = progress or NullProgress()
    result = GatherResult()
    directories = list_unsorted_directories(unsorted_dir)
    semaphore = asyncio.Semaphore(concurrency)

    async def process(directory: Path) -> None:
        async with semaphore:
            state = await gather_directory(directory, registry=registry, result=result)
        try:
            state_store.save(directory, state)
        except OSError:
            log.exception("Could not write state file for %s", directory.name)
        else:
            result.written += 1
        reporter.advance(description=directory.name)

    pending: list[Path] = []
    for directory in directories:
        result.examined += 1
        if should_skip(directory, registry=registry, state_store=state_store):
            log.debug("Skipping %s", directory.name)
            result.skipped += 1
            continue
        pending.append(directory)

    reporter.start("Getting game codes", total=len(pending))
    async with registry:
        await asyncio.gather(*(process(directory) for directory in pending))
    reporter.finish(f"Wrote {result.written} state file(s)")
    log.info(
        "Gathering finished: examined=%s, skipped=%s, written=%s, failed_lookups=%s",
        result.examined,
        result.skipped,
        result.written,
        result.failed_lookups,
    )
    return result


def gather_candidates(
    unsorted_dir: Path,
    *,
    registry: LocatorRegistry,
    state_store: ResolutionStateStore,
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressReporter | None = None,
) -> GatherResult:
    return asyncio.run(
        gather_candidates_async(
            unsorted_dir,
            registry=registry,
            state_store=state_store,
            concurrency=concurrency,
            progress=progress,
        )
    )
