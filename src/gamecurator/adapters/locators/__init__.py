"""Candidate locators for catalog sites without a dedicated client."""

from __future__ import annotations

from .base import EXTRACTION_ONLY_WEIGHTS, ScoringLocator
from .dmm import DmmLocator
from .getchu import GetchuLocator
from .other import OtherLocator

__all__ = [
    "EXTRACTION_ONLY_WEIGHTS",
    "DmmLocator",
    "GetchuLocator",
    "OtherLocator",
    "ScoringLocator",
]
