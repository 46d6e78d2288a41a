"""Store and catalog reconciliation."""

from __future__ import annotations

from .mapper import CANONICAL_ID_CUSTOM_FIELD, ENGINE_CUSTOM_FIELD, CatalogMapper
from .merge import (
    FRONTEND_OWNED_DEFAULTS,
    FRONTEND_OWNED_FIELDS,
    NEVER_PLAYED,
    merge_entry,
    new_entry,
    upsert_custom_field,
)
from .reconcile import (
    ExportPlan,
    ExportResult,
    ImportResult,
    catalog_is_newer,
    export_to_catalog,
    import_from_catalog,
    plan_export,
)

__all__ = [
    "CANONICAL_ID_CUSTOM_FIELD",
    "ENGINE_CUSTOM_FIELD",
    "FRONTEND_OWNED_DEFAULTS",
    "FRONTEND_OWNED_FIELDS",
    "NEVER_PLAYED",
    "CatalogMapper",
    "ExportPlan",
    "ExportResult",
    "ImportResult",
    "catalog_is_newer",
    "export_to_catalog",
    "import_from_catalog",
    "merge_entry",
    "new_entry",
    "plan_export",
    "upsert_custom_field",
]
