"""DLsite API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from gamecurator.adapters.http_resilience import ResilientClient

from .schema import DlsiteProductInfo, DlsiteSuggestResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from gamecurator.config.dlsite import DlsiteConfig
    from gamecurator.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

SUGGEST_PATH = "/suggest/"
PRODUCT_INFO_PATH = "/maniax/product/info/ajax"

_PRODUCT_INFO_ADAPTER = TypeAdapter(dict[str, DlsiteProductInfo])


class DlsiteAPIError(RuntimeError):
    """Raised when DLsite returns an unexpected response."""


class DlsiteClient:
    """Low-level HTTP client for the DLsite JSON endpoints.

    The underlying HTTP client is opened on first use inside the running event
    loop and kept until :meth:`aclose`, so the rate limit and cache span every
    request of one run.
    """

    def __init__(
        self,
        *,
        config: DlsiteConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    @property
    def suggest_sites(self) -> tuple[str, ...]:
        return self._config.suggest_sites

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    async def suggest(self, term: str, *, site: str) -> DlsiteSuggestResponse:
        payload = await self._get_json(SUGGEST_PATH, params={"site": site, "term": term})
        if not isinstance(payload, dict):
            raise DlsiteAPIError("Unexpected DLsite suggest payload")
        return DlsiteSuggestResponse.model_validate(payload)

    async def product_info(self, product_id: str) -> DlsiteProductInfo | None:
        """Return the product info, or ``None`` when DLsite does not know the id."""

        payload = await self._get_json(PRODUCT_INFO_PATH, params={"product_id": product_id})
        if isinstance(payload, list) and not payload:
            return None
        if not isinstance(payload, dict):
            raise DlsiteAPIError("Unexpected DLsite product info payload")
        return _PRODUCT_INFO_ADAPTER.validate_python(payload).get(product_id)

    async def _get_json(self, path: str, *, params: dict[str, str]) -> object:
        if self._resilience.base_url is None:
            raise DlsiteAPIError("Missing DLsite base_url in resilience configuration")
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return await self._client.get_json(path, params=params)
