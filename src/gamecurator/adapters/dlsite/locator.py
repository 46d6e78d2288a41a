"""DLsite candidate locator."""

from __future__ import annotations

import asyncio
import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx

from gamecurator.adapters.locators.base import ScoringLocator
from gamecurator.domain.identification import DEFAULT_WEIGHTS
from gamecurator.domain.model import CandidateRecord, GameMetadata, Language
from gamecurator.domain.ports import LocatorError

from .client import DlsiteAPIError, DlsiteClient

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.config.dlsite import DlsiteConfig
    from gamecurator.domain.identification import ScoreWeights

    from .schema import DlsiteSuggestWork

log = getLogger(__name__)

_WORK_NUMBER: Final = re.compile(
    r"(?<![A-Za-z0-9])(?:RJ|RE|VJ)(?:\d{8}|\d{6})(?!\d)",
    re.IGNORECASE,
)
_CLAIMED_PREFIXES: Final = ("RJ", "RE", "VJ")
_LANGUAGE_BY_PREFIX: Final = {"RJ": Language.JP, "RE": Language.EN, "VJ": Language.JP}


class DlsiteLocator(ScoringLocator):
    """Search the DLsite suggest endpoint of every configured site."""

    name = "dlsite"

    def __init__(
        self,
        *,
        config: DlsiteConfig | None = None,
        client: DlsiteClient | None = None,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> None:
        super().__init__(weights=weights)
        if client is None:
            if config is None:
                raise ValueError("DlsiteLocator needs a config or a client")
            client = DlsiteClient(config=config)
        self._client = client

    def extract_code(self, name: str) -> str:
        match = _WORK_NUMBER.search(name)
        return match.group(0).upper() if match else ""

    def should_use(self, canonical_id: str) -> bool:
        return canonical_id.startswith(_CLAIMED_PREFIXES)

    async def search(self, name: str) -> list[CandidateRecord]:
        try:
            replies = await asyncio.gather(
                *(self._search_site(name, site) for site in self._client.suggest_sites)
            )
        except (httpx.HTTPError, ValueError, DlsiteAPIError) as exc:
            raise LocatorError(f"DLsite search for {name!r} failed: {exc}") from exc

        records: dict[str, CandidateRecord] = {}
        for works in replies:
            for work in works:
                code = work.workno.upper()
                if code not in records:
                    records[code] = CandidateRecord(
                        code=code,
                        source_id=self.name,
                        display_name=work.work_name,
                    )
        return list(records.values())

    async def _search_site(self, name: str, site: str) -> list[DlsiteSuggestWork]:
        """Retry with the first half of ``name`` when the full name finds nothing."""

        reply = await self._client.suggest(name, site=site)
        if reply.work:
            return reply.work
        half = name[: len(name) // 2].strip()
        if not half:
            return []
        log.debug("No DLsite %s results for %r, retrying with %r", site, name, half)
        return (await self._client.suggest(half, site=site)).work

    async def fetch_metadata(
        self,
        canonical_id: str,
        directory: Path | None = None,  # noqa: ARG002
    ) -> GameMetadata | None:
        language = _LANGUAGE_BY_PREFIX.get(canonical_id[:2].upper())
        if language is None:
            log.error("%s is not a DLsite id", canonical_id)
            return None
        try:
            info = await self._client.product_info(canonical_id)
        except (httpx.HTTPError, ValueError, DlsiteAPIError) as exc:
            raise LocatorError(f"DLsite product info for {canonical_id} failed: {exc}") from exc
        if info is None:
            log.warning("DLsite does not know %s", canonical_id)
            return None

        image_url = info.image_url()
        return GameMetadata(
            source_name=self.name,
            name_by_language={language: info.work_name} if info.work_name else {},
            maker_by_language={language: info.maker_name} if info.maker_name else {},
            image_urls={language: image_url} if image_url else {},
            release_date=info.release_date(),
            community_stars=info.rate_average_2dp,
            community_star_votes=info.rate_count,
            series=info.title_name or None,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
