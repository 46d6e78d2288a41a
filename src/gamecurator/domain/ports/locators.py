"""Ports for the external catalogs that propose candidate codes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path
    from types import TracebackType

    from gamecurator.domain.model import (
        CandidateRecord,
        GameMetadata,
        LocatorCodes,
        ScoredCode,
    )


class LocatorError(RuntimeError):
    """Raised when a locator lookup fails (network, payload, rate limit)."""


@runtime_checkable
class CandidateLocator(Protocol):
    """One metadata source able to search, score and claim canonical ids."""

    @property
    def name(self) -> str: ...

    async def search(self, name: str) -> list[CandidateRecord]: ...

    def extract_code(self, name: str) -> str: ...

    def score_codes(self, codes: LocatorCodes, original_name: str) -> list[ScoredCode]: ...

    def should_use(self, canonical_id: str) -> bool: ...

    async def fetch_metadata(
        self,
        canonical_id: str,
        directory: Path | None = None,
    ) -> GameMetadata | None: ...

    async def aclose(self) -> None: ...


class LocatorRegistry:
    """Ordered set of locators, looked up by name or by claimed canonical id."""

    def __init__(self, locators: Iterable[CandidateLocator]) -> None:
        self._locators: dict[str, CandidateLocator] = {}
        for locator in locators:
            if locator.name in self._locators:
                raise ValueError(f"Duplicate locator name: {locator.name}")
            self._locators[locator.name] = locator

    def __iter__(self) -> Iterator[CandidateLocator]:
        return iter(self._locators.values())

    def __len__(self) -> int:
        return len(self._locators)

    def get(self, name: str) -> CandidateLocator | None:
        return self._locators.get(name)

    def for_canonical_id(self, canonical_id: str) -> CandidateLocator | None:
        """Return the first locator claiming ``canonical_id``."""

        for locator in self._locators.values():
            if locator.should_use(canonical_id):
                return locator
        return None

    def claims(self, name: str) -> bool:
        return self.for_canonical_id(name) is not None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP clients the locators opened within the running loop."""

        for locator in self._locators.values():
            await locator.aclose()
