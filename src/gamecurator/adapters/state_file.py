"""JSON state file kept inside each unsorted directory."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from gamecurator.domain.model import CandidateRecord, LocatorCodes, ResolutionState
from gamecurator.domain.ports import StateFileError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

STATE_FILE_NAME: Final[str] = "!foundCodes.txt"
_FILE_KEY: Final[str] = "file"
_NO_MATCH_KEY: Final[str] = "noMatch"


class _StateModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StoredCandidate(_StateModel):
    code: str = Field(validation_alias=AliasChoices("code", "workno"))
    display_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("displayName", "work_name"),
        serialization_alias="displayName",
    )
    source_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sourceId", "source_id"),
        serialization_alias="sourceId",
    )

    @field_validator("code", mode="before")
    @classmethod
    def _first_code(cls, value: object) -> object:
        # older getchu results stored the id as a one-element list
        if isinstance(value, list) and value:
            return value[0]
        return value


class StoredLocatorCodes(_StateModel):
    extracted_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("extractedCode", "extracted_code"),
        serialization_alias="extractedCode",
    )
    found_codes: list[StoredCandidate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("foundCodes", "found_codes"),
        serialization_alias="foundCodes",
    )

    @field_validator("found_codes", mode="before")
    @classmethod
    def _unwrap_works(cls, value: object) -> object:
        if isinstance(value, dict) and "works" in value:
            return value["works"]
        if value is None:
            return []
        return value

    def to_domain(self, locator_name: str) -> LocatorCodes:
        return LocatorCodes(
            extracted_code=self.extracted_code or "",
            found_codes=tuple(
                CandidateRecord(
                    code=candidate.code,
                    source_id=candidate.source_id or locator_name,
                    display_name=candidate.display_name,
                )
                for candidate in self.found_codes
            ),
        )

    @classmethod
    def from_domain(cls, codes: LocatorCodes) -> StoredLocatorCodes:
        return cls(
            extracted_code=codes.extracted_code,
            found_codes=[
                StoredCandidate(
                    code=candidate.code,
                    display_name=candidate.display_name,
                    source_id=candidate.source_id,
                )
                for candidate in codes.found_codes
            ],
        )


def parse_state(payload: object, *, default_file: str) -> ResolutionState:
    if not isinstance(payload, dict):
        raise StateFileError("State file does not hold a JSON object")

    file_name = payload.get(_FILE_KEY) or default_file
    if not isinstance(file_name, str):
        raise StateFileError(f"Unexpected {_FILE_KEY!r} value: {file_name!r}")

    codes: dict[str, LocatorCodes] = {}
    for key, value in payload.items():
        if key in {_FILE_KEY, _NO_MATCH_KEY}:
            continue
        if not isinstance(value, dict):
            log.debug("Ignoring state key %s", key)
            continue
        try:
            codes[key] = StoredLocatorCodes.model_validate(value).to_domain(key)
        except ValidationError as exc:
            raise StateFileError(f"Invalid codes for {key}: {exc}") from exc

    return ResolutionState(
        file=file_name,
        codes=codes,
        no_match=bool(payload.get(_NO_MATCH_KEY, False)),
    )


def dump_state(state: ResolutionState) -> dict[str, object]:
    payload: dict[str, object] = {_FILE_KEY: state.file}
    for locator_name, codes in state.codes.items():
        payload[locator_name] = StoredLocatorCodes.from_domain(codes).model_dump(
            by_alias=True,
            exclude_none=True,
        )
    if state.no_match:
        payload[_NO_MATCH_KEY] = True
    return payload


class JsonStateFileStore:
    """Reads and writes ``!foundCodes.txt`` beside the directory's contents."""

    def __init__(self, file_name: str = STATE_FILE_NAME) -> None:
        self.file_name = file_name

    def path_for(self, directory: Path) -> Path:
        return directory / self.file_name

    def exists(self, directory: Path) -> bool:
        return self.path_for(directory).is_file()

    def load(self, directory: Path) -> ResolutionState:
        path = self.path_for(directory)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StateFileError(f"Cannot read {path}: {exc}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StateFileError(f"{path} is not valid JSON: {exc}") from exc
        return parse_state(payload, default_file=directory.name)

    def save(self, directory: Path, state: ResolutionState) -> None:
        path = self.path_for(directory)
        text = json.dumps(dump_state(state), ensure_ascii=False, indent=4)
        path.write_text(text + "\n", encoding="utf-8")
        log.debug("Wrote %s", path)
