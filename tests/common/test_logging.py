from __future__ import annotations

import logging

import pytest

from gamecurator.common.logging import configure_logging, level_from_env


def test_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAMECURATOR_LOG_LEVEL", raising=False)
    assert level_from_env() == logging.INFO

    monkeypatch.setenv("GAMECURATOR_LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG

    monkeypatch.setenv("GAMECURATOR_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="chatty"):
        level_from_env()


def test_configure_logging_defaults_to_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("GAMECURATOR_LOG_LEVEL", "WARNING")

    configure_logging()
    configure_logging(level=logging.DEBUG, force=True)

    assert [(call["level"], call["force"]) for call in calls] == [
        (logging.WARNING, False),
        (logging.DEBUG, True),
    ]
