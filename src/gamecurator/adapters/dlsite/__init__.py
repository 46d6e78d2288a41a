"""DLsite locator adapter."""

from __future__ import annotations

from .client import DlsiteAPIError, DlsiteClient
from .locator import DlsiteLocator

__all__ = ["DlsiteAPIError", "DlsiteClient", "DlsiteLocator"]
