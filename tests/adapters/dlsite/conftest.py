"""Shared fixtures for DLsite adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gamecurator.adapters.dlsite import DlsiteClient
from gamecurator.config.dlsite import DlsiteConfig
from gamecurator.config.http_resilience import ResilienceConfig
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.http import Handler


@pytest.fixture
def dlsite_config() -> DlsiteConfig:
    return DlsiteConfig(
        resilience=ResilienceConfig(name="dlsite", base_url="https://dlsite.test", cache=None),
        suggest_sites=("adult-jp", "adult-en"),
    )


@pytest.fixture
def make_client(dlsite_config: DlsiteConfig) -> Callable[[Handler], DlsiteClient]:
    def build(handler: Handler) -> DlsiteClient:
        return DlsiteClient(config=dlsite_config, client_factory=make_client_factory(handler))

    return build
