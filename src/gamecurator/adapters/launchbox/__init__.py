"""LaunchBox catalog adapter."""

from __future__ import annotations

from .xml_catalog import CatalogFormatError, XmlCatalogStore

__all__ = ["CatalogFormatError", "XmlCatalogStore"]
