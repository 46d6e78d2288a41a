"""DLsite configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_str
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_DLSITE_BASE_URL = "https://www.dlsite.com"
DEFAULT_USER_AGENT = "gamecurator"
SUGGEST_SITES = ("adult-jp", "adult-en", "pro")
CACHE_TTL_SECONDS = 24 * 60 * 60


def has_results(payload: object) -> bool:
    """Cache replies only when they found something; empty ones are retried later.

    DLsite answers an unknown product id with ``[]`` and a fruitless search with
    ``{"work": []}``.
    """

    if isinstance(payload, list):
        return bool(payload)
    if isinstance(payload, dict):
        works = payload.get("work")
        return bool(works) if isinstance(works, list) else bool(payload)
    return True


@dataclass(frozen=True, slots=True)
class DlsiteConfig:
    resilience: ResilienceConfig
    suggest_sites: tuple[str, ...] = SUGGEST_SITES


def get_dlsite_config() -> DlsiteConfig:
    persistent_cache = env_bool("DLSITE_PERSISTENT_CACHE", default=False)
    resilience = ResilienceConfig(
        name="dlsite",
        base_url=env_str("DLSITE_BASE_URL", default=DEFAULT_DLSITE_BASE_URL),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=4),
        cache=CacheConfig(
            enabled=True,
            backend="sqlite" if persistent_cache else "memory",
            default_ttl_seconds=CACHE_TTL_SECONDS,
            should_cache=has_results,
        ),
        default_headers={"User-Agent": env_str("DLSITE_USER_AGENT", default=DEFAULT_USER_AGENT)},
    )
    return DlsiteConfig(resilience=resilience)
