"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gamecurator.adapters.dlsite import DlsiteLocator
from gamecurator.adapters.launchbox import XmlCatalogStore
from gamecurator.adapters.locators import DmmLocator, GetchuLocator, OtherLocator
from gamecurator.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from gamecurator.adapters.state_file import JsonStateFileStore
from gamecurator.config import (
    get_dlsite_config,
    get_identification_config,
    get_launchbox_config,
    get_library_config,
)
from gamecurator.domain.catalog_sync import (
    CatalogMapper,
    ExportResult,
    ImportResult,
    export_to_catalog,
    import_from_catalog,
)
from gamecurator.domain.identification import (
    DecisionGate,
    DecisionThresholds,
    GatherResult,
    OrganizeResult,
    gather_candidates,
    organize_directories,
)
from gamecurator.domain.library import (
    DownloadResult,
    DuplicateReport,
    ExecutableRules,
    ScanResult,
    download_sources,
    find_duplicates,
    scan_library,
    set_force_update,
)
from gamecurator.domain.ports import GameUnitOfWork, LocatorRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gamecurator.config import (
        DlsiteConfig,
        IdentificationConfig,
        LaunchBoxConfig,
        LibraryConfig,
    )
    from gamecurator.domain.ports import (
        CatalogStore,
        ConfirmationProvider,
        ProgressReporter,
        ResolutionStateStore,
    )

UnitOfWorkFactory = Callable[[], GameUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class SyncAllResult:
    gathered: GatherResult
    organized: OrganizeResult
    imported: ImportResult
    scanned: ScanResult
    downloaded: DownloadResult
    exported: ExportResult


def build_locator_registry(dlsite_config: DlsiteConfig | None = None) -> LocatorRegistry:
    """Locators in priority order; the first one claiming an id wins."""

    return LocatorRegistry(
        [
            DlsiteLocator(config=dlsite_config or get_dlsite_config()),
            GetchuLocator(),
            DmmLocator(),
            OtherLocator(),
        ]
    )


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def build_thresholds(config: IdentificationConfig) -> DecisionThresholds:
    if config.should_ask:
        return DecisionThresholds(
            ask=config.min_score_to_ask,
            accept=config.min_score_to_accept,
            max_suggestions=config.max_results_to_suggest,
        )
    return DecisionThresholds.without_asking(
        accept=config.min_score_to_accept,
        max_suggestions=config.max_results_to_suggest,
    )


def build_catalog_mapper(config: LaunchBoxConfig) -> CatalogMapper:
    return CatalogMapper(
        platform=config.platform,
        canonical_id_field=config.canonical_id_field,
        preferred_language=config.preferred_language,
    )


def get_codes(
    *,
    config: IdentificationConfig | None = None,
    registry: LocatorRegistry | None = None,
    state_store: ResolutionStateStore | None = None,
    progress: ProgressReporter | None = None,
) -> GatherResult:
    """Write candidate codes for every new unsorted directory."""

    effective_config = config or get_identification_config()
    log.info("Gathering candidate codes in %s", effective_config.unsorted_dir)
    return gather_candidates(
        effective_config.unsorted_dir,
        registry=registry or build_locator_registry(),
        state_store=state_store or JsonStateFileStore(),
        concurrency=effective_config.concurrency,
        progress=progress,
    )


def organize(
    *,
    confirmation: ConfirmationProvider,
    config: IdentificationConfig | None = None,
    registry: LocatorRegistry | None = None,
    state_store: ResolutionStateStore | None = None,
    progress: ProgressReporter | None = None,
) -> OrganizeResult:
    """Score gathered candidates and file every directory that is decided."""

    effective_config = config or get_identification_config()
    gate = DecisionGate(build_thresholds(effective_config), confirmation)
    log.info(
        "Organizing %s into %s (ask=%s, accept=%s)",
        effective_config.unsorted_dir,
        effective_config.target_dir,
        gate.thresholds.ask,
        gate.thresholds.accept,
    )
    return organize_directories(
        effective_config.unsorted_dir,
        effective_config.target_dir,
        registry=registry or build_locator_registry(),
        state_store=state_store or JsonStateFileStore(),
        gate=gate,
        progress=progress,
    )


def scan(
    *,
    config: LibraryConfig | None = None,
    registry: LocatorRegistry | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressReporter | None = None,
) -> ScanResult:
    """Create, flag and restore records from the library folders."""

    effective_config = config or get_library_config()
    return scan_library(
        effective_config.library_dirs,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        registry=registry or build_locator_registry(),
        rules=ExecutableRules(
            extensions=effective_config.executable_extensions,
            banned_names=effective_config.banned_names,
            search_depth=effective_config.search_depth,
        ),
        progress=progress,
    )


def download_game_sources(
    *,
    config: LibraryConfig | None = None,
    registry: LocatorRegistry | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressReporter | None = None,
) -> DownloadResult:
    effective_config = config or get_library_config()
    return download_sources(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        registry=registry or build_locator_registry(),
        concurrency=effective_config.concurrency,
        progress=progress,
    )


def find_library_duplicates(*, config: LibraryConfig | None = None) -> list[DuplicateReport]:
    """Codes in the library folders holding several copies or a broken layout."""

    effective_config = config or get_library_config()
    reports = find_duplicates(effective_config.library_dirs)
    for report in reports:
        log.warning("%s: %s", report.code, report.status())
    return reports


def _catalog_store(config: LaunchBoxConfig, catalog_store: CatalogStore | None) -> CatalogStore:
    if catalog_store is not None:
        return catalog_store
    return XmlCatalogStore(config.platform_file, backup_path=config.backup_file)


def export_catalog(
    *,
    config: LaunchBoxConfig | None = None,
    catalog_store: CatalogStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressReporter | None = None,
) -> ExportResult:
    """Write the store into the LaunchBox platform file."""

    effective_config = config or get_launchbox_config()
    return export_to_catalog(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        catalog_store=_catalog_store(effective_config, catalog_store),
        mapper=build_catalog_mapper(effective_config),
        progress=progress,
    )


def import_catalog(
    *,
    config: LaunchBoxConfig | None = None,
    catalog_store: CatalogStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressReporter | None = None,
) -> ImportResult:
    """Copy LaunchBox edits back onto the store."""

    effective_config = config or get_launchbox_config()
    return import_from_catalog(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        catalog_store=_catalog_store(effective_config, catalog_store),
        mapper=build_catalog_mapper(effective_config),
        only_update_newer=effective_config.only_update_newer,
        progress=progress,
    )


def force_update(
    *,
    canonical_ids: Iterable[str] | None = None,
    source: bool = False,
    executable: bool = False,
    images: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    updated = set_force_update(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        canonical_ids=canonical_ids,
        source=source,
        executable=executable,
        images=images,
    )
    log.info("Flagged %s record(s) for a forced update", updated)
    return updated


def sync_all(
    *,
    confirmation: ConfirmationProvider,
    identification: IdentificationConfig | None = None,
    library: LibraryConfig | None = None,
    launchbox: LaunchBoxConfig | None = None,
    registry: LocatorRegistry | None = None,
    state_store: ResolutionStateStore | None = None,
    catalog_store: CatalogStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressReporter | None = None,
    organize_progress: ProgressReporter | None = None,
) -> SyncAllResult:
    """Get codes, organize, import, scan, download sources, export; stops at the first error.

    Importing before scanning keeps LaunchBox edits from being overwritten by the
    export at the end.
    """

    identification_config = identification or get_identification_config()
    library_config = library or get_library_config()
    launchbox_config = launchbox or get_launchbox_config()
    effective_registry = registry or build_locator_registry()
    effective_state_store = state_store or JsonStateFileStore()
    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    effective_catalog = _catalog_store(launchbox_config, catalog_store)

    gathered = get_codes(
        config=identification_config,
        registry=effective_registry,
        state_store=effective_state_store,
        progress=progress,
    )
    organized = organize(
        confirmation=confirmation,
        config=identification_config,
        registry=effective_registry,
        state_store=effective_state_store,
        progress=organize_progress,
    )
    imported = import_catalog(
        config=launchbox_config,
        catalog_store=effective_catalog,
        unit_of_work_factory=effective_uow,
        progress=progress,
    )
    scanned = scan(
        config=library_config,
        registry=effective_registry,
        unit_of_work_factory=effective_uow,
        progress=progress,
    )
    downloaded = download_game_sources(
        config=library_config,
        registry=effective_registry,
        unit_of_work_factory=effective_uow,
        progress=progress,
    )
    exported = export_catalog(
        config=launchbox_config,
        catalog_store=effective_catalog,
        unit_of_work_factory=effective_uow,
        progress=progress,
    )
    log.info(
        "Sync finished: filed=%s, imported=%s, scanned=%s, downloaded=%s, exported=%s",
        organized.filed,
        imported.updated,
        scanned.examined,
        downloaded.fetched,
        exported.created + exported.updated,
    )
    return SyncAllResult(
        gathered=gathered,
        organized=organized,
        imported=imported,
        scanned=scanned,
        downloaded=downloaded,
        exported=exported,
    )
