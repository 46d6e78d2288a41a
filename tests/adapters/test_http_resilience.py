from __future__ import annotations

import asyncio
from typing import cast

import httpx
import pytest
from hishel import Response as HishelCacheResponse

from gamecurator.adapters.http_resilience import ResilientClient, _ShouldCacheResponseFilter
from gamecurator.config.dlsite import has_results
from gamecurator.config.http_resilience import CacheConfig, RateLimit, ResilienceConfig
from tests.helpers.http import make_client_factory


def _config() -> ResilienceConfig:
    return ResilienceConfig(
        name="dlsite",
        base_url="https://dlsite.test",
        cache=None,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )


def test_get_json_decodes_the_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["product_id"] == "RJ123456"
        return httpx.Response(200, json={"RJ123456": {"work_name": "Game"}})

    async def fetch() -> object:
        async with make_client_factory(handler)(_config()) as client:
            return await client.get_json("/info", params={"product_id": "RJ123456"})

    assert asyncio.run(fetch()) == {"RJ123456": {"work_name": "Game"}}


def test_get_json_raises_on_error_status() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json=[])

    async def fetch() -> object:
        async with make_client_factory(handler)(_config()) as client:
            return await client.get_json("/info")

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(fetch())


@pytest.mark.parametrize(
    ("body", "cached"),
    [
        (b'{"RJ123456": {"work_name": "Game"}}', True),
        (b'{"work": [{"workno": "RJ123456"}]}', True),
        (b"[]", False),
        (b'{"work": []}', False),
        (b"<html>not json</html>", True),
    ],
)
def test_empty_replies_are_not_cached(body: bytes, cached: bool) -> None:  # noqa: FBT001
    response_filter = _ShouldCacheResponseFilter(has_results)
    item = cast("HishelCacheResponse", None)

    assert response_filter.apply(item, body) is cached


def test_unknown_cache_backend_is_rejected() -> None:
    config = ResilienceConfig(
        name="dlsite",
        cache=CacheConfig(backend="redis"),  # type: ignore[arg-type]
    )

    with pytest.raises(ValueError, match="Unsupported cache backend"):
        ResilientClient(config)
