"""Library folder scanning and metadata enrichment."""

from __future__ import annotations

from .duplicates import (
    CopyCount,
    CopyProblem,
    DuplicateReport,
    count_copies,
    find_duplicates,
)
from .scan import (
    ExecutableLocation,
    ExecutableRules,
    ScanResult,
    is_deleted_directory,
    locate_executable,
    scan_library,
    select_executable,
)
from .sources import (
    DownloadResult,
    apply_metadata,
    download_sources,
    download_sources_async,
    needs_source,
    set_force_update,
)

__all__ = [
    "CopyCount",
    "CopyProblem",
    "DownloadResult",
    "DuplicateReport",
    "ExecutableLocation",
    "ExecutableRules",
    "ScanResult",
    "apply_metadata",
    "count_copies",
    "download_sources",
    "download_sources_async",
    "find_duplicates",
    "is_deleted_directory",
    "locate_executable",
    "needs_source",
    "scan_library",
    "select_executable",
    "set_force_update",
]
