"""Settings for scanning the library folders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gamecurator.domain.library.scan import (
    DEFAULT_BANNED_NAMES,
    DEFAULT_EXECUTABLE_EXTENSIONS,
    DEFAULT_SEARCH_DEPTH,
)

from .env import env_int, env_list, env_paths

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CONCURRENCY = 5


@dataclass(frozen=True, slots=True)
class LibraryConfig:
    library_dirs: tuple[Path, ...]
    executable_extensions: frozenset[str] = DEFAULT_EXECUTABLE_EXTENSIONS
    banned_names: tuple[str, ...] = DEFAULT_BANNED_NAMES
    search_depth: int = DEFAULT_SEARCH_DEPTH
    concurrency: int = DEFAULT_CONCURRENCY


def get_library_config() -> LibraryConfig:
    extensions = env_list(
        "GAMECURATOR_EXE_EXTENSIONS",
        default=sorted(DEFAULT_EXECUTABLE_EXTENSIONS),
    )
    return LibraryConfig(
        library_dirs=env_paths("GAMECURATOR_LIBRARY_DIRS"),
        executable_extensions=frozenset(extension.lower() for extension in extensions),
        banned_names=tuple(
            name.lower()
            for name in env_list("GAMECURATOR_BANNED_NAMES", default=DEFAULT_BANNED_NAMES)
        ),
        search_depth=env_int(
            "GAMECURATOR_EXE_SEARCH_DEPTH", default=DEFAULT_SEARCH_DEPTH, minimum=1
        ),
        concurrency=env_int("GAMECURATOR_CONCURRENCY", default=DEFAULT_CONCURRENCY, minimum=1),
    )
