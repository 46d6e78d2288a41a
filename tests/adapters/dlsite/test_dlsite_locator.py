from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx
import pytest

from gamecurator.adapters.dlsite import DlsiteLocator
from gamecurator.domain.model import CandidateRecord, Language
from gamecurator.domain.ports import LocatorError

if TYPE_CHECKING:
    from collections.abc import Callable

    from gamecurator.adapters.dlsite import DlsiteClient
    from gamecurator.config.dlsite import DlsiteConfig
    from tests.helpers.http import Handler


def _suggest_handler(replies: dict[tuple[str, str], list[dict[str, str]]]) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        key = (request.url.params["site"], request.url.params["term"])
        return httpx.Response(200, json={"work": replies.get(key, [])})

    return handler


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Amazing Game [Maker] (RJ123456)", "RJ123456"),
        ("[rj01234567] Long Number", "RJ01234567"),
        ("VJ012345_trial", "VJ012345"),
        ("XRJ123456", ""),
        ("RJ1234567", ""),
        ("No code here", ""),
    ],
)
def test_extract_code(dlsite_config: DlsiteConfig, name: str, expected: str) -> None:
    assert DlsiteLocator(config=dlsite_config).extract_code(name) == expected


def test_should_use_claims_dlsite_prefixes(dlsite_config: DlsiteConfig) -> None:
    locator = DlsiteLocator(config=dlsite_config)

    assert locator.should_use("RJ123456")
    assert locator.should_use("RE123456")
    assert locator.should_use("VJ123456")
    assert not locator.should_use("123456")


def test_locator_needs_config_or_client() -> None:
    with pytest.raises(ValueError, match="config or a client"):
        DlsiteLocator()


def test_search_merges_sites_and_dedupes_codes(
    make_client: Callable[[Handler], DlsiteClient],
) -> None:
    client = make_client(
        _suggest_handler(
            {
                ("adult-jp", "Amazing Game"): [
                    {"workno": "RJ123456", "work_name": "Amazing Game"},
                    {"workno": "RJ654321", "work_name": "Amazing Game 2"},
                ],
                ("adult-en", "Amazing Game"): [
                    {"workno": "rj123456", "work_name": "Amazing Game (EN)"},
                    {"workno": "RE111111", "work_name": "Amazing Game"},
                ],
            }
        )
    )
    locator = DlsiteLocator(client=client)

    async def run() -> list[CandidateRecord]:
        try:
            return await locator.search("Amazing Game")
        finally:
            await locator.aclose()

    assert asyncio.run(run()) == [
        CandidateRecord(code="RJ123456", source_id="dlsite", display_name="Amazing Game"),
        CandidateRecord(code="RJ654321", source_id="dlsite", display_name="Amazing Game 2"),
        CandidateRecord(code="RE111111", source_id="dlsite", display_name="Amazing Game"),
    ]


def test_search_retries_with_half_the_name(
    make_client: Callable[[Handler], DlsiteClient],
) -> None:
    terms: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        terms.append(request.url.params["term"])
        if request.url.params["term"] == "Amazing":
            return httpx.Response(200, json={"work": [{"workno": "RJ123456"}]})
        return httpx.Response(200, json={"work": []})

    locator = DlsiteLocator(client=make_client(handler))

    found = asyncio.run(locator.search("Amazing Game Plus"))

    assert [record.code for record in found] == ["RJ123456"]
    assert sorted(terms) == ["Amazing", "Amazing", "Amazing Game Plus", "Amazing Game Plus"]


def test_search_failures_become_locator_errors(
    make_client: Callable[[Handler], DlsiteClient],
) -> None:
    locator = DlsiteLocator(client=make_client(lambda _request: httpx.Response(503)))

    with pytest.raises(LocatorError, match="DLsite search"):
        asyncio.run(locator.search("Amazing Game"))


def test_fetch_metadata_maps_product_info(
    make_client: Callable[[Handler], DlsiteClient],
) -> None:
    payload = {
        "RE123456": {
            "work_name": "Amazing Game",
            "maker_name": "Circle",
            "regist_date": "2021-05-06 00:00:00",
            "rate_average_2dp": 4.5,
            "rate_count": 10,
            "work_image": "//img.dlsite.jp/main.jpg",
            "title_name": "Amazing Series",
        }
    }
    locator = DlsiteLocator(client=make_client(lambda _request: httpx.Response(200, json=payload)))

    metadata = asyncio.run(locator.fetch_metadata("RE123456"))

    assert metadata is not None
    assert metadata.source_name == "dlsite"
    assert metadata.name_by_language == {Language.EN: "Amazing Game"}
    assert metadata.maker_by_language == {Language.EN: "Circle"}
    assert metadata.image_urls == {Language.EN: "https://img.dlsite.jp/main.jpg"}
    assert metadata.release_date == datetime(2021, 5, 6, tzinfo=UTC)
    assert (metadata.community_stars, metadata.community_star_votes) == (4.5, 10)
    assert metadata.series == "Amazing Series"


def test_fetch_metadata_unknown_or_foreign_ids(
    make_client: Callable[[Handler], DlsiteClient],
) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[])

    locator = DlsiteLocator(client=make_client(handler))

    assert asyncio.run(locator.fetch_metadata("RJ000000")) is None
    assert asyncio.run(locator.fetch_metadata("123456")) is None
    assert len(requests) == 1
