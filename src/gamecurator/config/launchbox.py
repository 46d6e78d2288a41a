"""Settings for the LaunchBox catalog document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gamecurator.domain.model import CanonicalIdField, Language

from .env import env_bool, env_path, env_str
from .errors import ConfigurationError
from .storage import get_storage_config

DEFAULT_PLATFORM = "WINDOWS"


@dataclass(frozen=True, slots=True)
class LaunchBoxConfig:
    launchbox_dir: Path
    backup_dir: Path
    platform: str = DEFAULT_PLATFORM
    canonical_id_field: CanonicalIdField = CanonicalIdField.SORT_TITLE
    preferred_language: Language = Language.EN
    only_update_newer: bool = True

    @property
    def platform_file(self) -> Path:
        return self.launchbox_dir / "Data" / "Platforms" / f"{self.platform}.xml"

    @property
    def backup_file(self) -> Path:
        return self.backup_dir / f"{self.platform}-backup.xml"


def _enum_setting[TEnum: (CanonicalIdField, Language)](
    name: str,
    enum_type: type[TEnum],
    default: TEnum,
) -> TEnum:
    raw = env_str(name, default=default.value)
    try:
        return enum_type(raw)
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigurationError(f"{name} must be one of {choices}, got {raw!r}") from exc


def get_launchbox_config() -> LaunchBoxConfig:
    backup = env_str("GAMECURATOR_BACKUP_DIR", default="")
    return LaunchBoxConfig(
        launchbox_dir=env_path("LAUNCHBOX_DIR"),
        backup_dir=Path(backup).expanduser() if backup else get_storage_config().backup_dir(),
        platform=env_str("LAUNCHBOX_PLATFORM", default=DEFAULT_PLATFORM),
        canonical_id_field=_enum_setting(
            "GAMECURATOR_CANONICAL_ID_FIELD", CanonicalIdField, CanonicalIdField.SORT_TITLE
        ),
        preferred_language=_enum_setting(
            "GAMECURATOR_PREFERRED_LANGUAGE", Language, Language.EN
        ),
        only_update_newer=env_bool("GAMECURATOR_ONLY_UPDATE_NEWER", default=True),
    )
