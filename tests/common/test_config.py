from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest

from gamecurator.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_bool,
    env_int,
    env_list,
    env_paths,
    get_dlsite_config,
    get_identification_config,
    get_launchbox_config,
    get_library_config,
    require_env_vars,
)
from gamecurator.config.dlsite import has_results
from gamecurator.domain.model import CanonicalIdField, Language


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.setenv("BLANK_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "BLANK_VAR"])

    assert "BLANK_VAR, MISSING_VAR" in str(exc.value)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("yes", True), ("0", False), (" TRUE ", True)],
)
def test_env_bool(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("FLAG", raw)

    assert env_bool("FLAG", default=not expected) is expected


def test_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG", "maybe")

    with pytest.raises(ConfigurationError, match="boolean"):
        env_bool("FLAG", default=True)


def test_env_int_defaults_and_bounds(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NUMBER", raising=False)
    assert env_int("NUMBER", default=3) == 3

    monkeypatch.setenv("NUMBER", "0")
    with pytest.raises(ConfigurationError, match="at least 1"):
        env_int("NUMBER", default=3, minimum=1)

    monkeypatch.setenv("NUMBER", "three")
    with pytest.raises(ConfigurationError, match="integer"):
        env_int("NUMBER", default=3)


def test_env_list_and_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ITEMS", " a, ,b ")
    monkeypatch.setenv("DIRS", os.pathsep.join([str(tmp_path / "one"), str(tmp_path / "two")]))

    assert env_list("ITEMS", default=()) == ("a", "b")
    assert env_paths("DIRS") == (tmp_path / "one", tmp_path / "two")


def test_identification_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GAMECURATOR_UNSORTED_DIR", str(tmp_path / "unsorted"))
    monkeypatch.setenv("GAMECURATOR_TARGET_DIR", str(tmp_path / "sorted"))
    monkeypatch.setenv("GAMECURATOR_SHOULD_ASK", "false")
    monkeypatch.setenv("GAMECURATOR_MIN_SCORE_TO_ACCEPT", "6")

    config = get_identification_config()

    assert config.unsorted_dir == tmp_path / "unsorted"
    assert config.should_ask is False
    assert (config.min_score_to_ask, config.min_score_to_accept) == (1, 6)


def test_identification_config_rejects_inverted_thresholds(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("GAMECURATOR_UNSORTED_DIR", str(tmp_path))
    monkeypatch.setenv("GAMECURATOR_TARGET_DIR", str(tmp_path))
    monkeypatch.setenv("GAMECURATOR_MIN_SCORE_TO_ASK", "5")
    monkeypatch.setenv("GAMECURATOR_MIN_SCORE_TO_ACCEPT", "4")

    with pytest.raises(ConfigurationError, match="must not exceed"):
        get_identification_config()


def test_identification_config_requires_directories(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAMECURATOR_UNSORTED_DIR", raising=False)

    with pytest.raises(MissingConfigurationError, match="GAMECURATOR_UNSORTED_DIR"):
        get_identification_config()


def test_launchbox_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LAUNCHBOX_DIR", str(tmp_path / "LaunchBox"))
    monkeypatch.setenv("GAMECURATOR_BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setenv("GAMECURATOR_CANONICAL_ID_FIELD", "CustomField")
    monkeypatch.setenv("GAMECURATOR_PREFERRED_LANGUAGE", "jp")
    monkeypatch.delenv("LAUNCHBOX_PLATFORM", raising=False)

    config = get_launchbox_config()

    assert config.platform_file == tmp_path / "LaunchBox" / "Data" / "Platforms" / "WINDOWS.xml"
    assert config.backup_file == tmp_path / "backups" / "WINDOWS-backup.xml"
    assert config.canonical_id_field is CanonicalIdField.CUSTOM_FIELD
    assert config.preferred_language is Language.JP
    assert config.only_update_newer is True


def test_launchbox_config_rejects_unknown_carrier(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("LAUNCHBOX_DIR", str(tmp_path))
    monkeypatch.setenv("GAMECURATOR_CANONICAL_ID_FIELD", "Notes")

    with pytest.raises(ConfigurationError, match="SortTitle"):
        get_launchbox_config()


def test_library_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GAMECURATOR_LIBRARY_DIRS", str(tmp_path))
    monkeypatch.setenv("GAMECURATOR_EXE_EXTENSIONS", ".EXE,.bat")
    monkeypatch.setenv("GAMECURATOR_BANNED_NAMES", "Setup")
    monkeypatch.setenv("GAMECURATOR_EXE_SEARCH_DEPTH", "2")

    config = get_library_config()

    assert config.library_dirs == (tmp_path,)
    assert config.executable_extensions == frozenset({".exe", ".bat"})
    assert config.banned_names == ("setup",)
    assert config.search_depth == 2


def test_dlsite_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DLSITE_BASE_URL", "https://dlsite.test")
    monkeypatch.setenv("DLSITE_PERSISTENT_CACHE", "yes")

    config = get_dlsite_config()

    assert config.resilience.base_url == "https://dlsite.test"
    assert config.resilience.cache is not None
    assert config.resilience.cache.backend == "sqlite"
    assert config.suggest_sites == ("adult-jp", "adult-en", "pro")


def test_only_replies_with_results_are_cached() -> None:
    assert has_results({"work": [{"workno": "RJ1"}]})
    assert has_results({"RJ123456": {"work_name": "Game"}})
    assert not has_results({"work": []})
    assert not has_results([])
    assert not has_results({})
