"""LaunchBox platform XML as a :class:`CatalogStore`."""

from __future__ import annotations

import shutil
import xml.etree.ElementTree as ET
from logging import getLogger
from typing import TYPE_CHECKING, Final

from gamecurator.domain.model import CatalogDocument, CatalogEntry, CustomField

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

ROOT_TAG: Final[str] = "LaunchBox"
GAME_TAG: Final[str] = "Game"
CUSTOM_FIELD_TAG: Final[str] = "CustomField"
_CUSTOM_FIELD_PARTS: Final = ("GameID", "Name", "Value")


class CatalogFormatError(RuntimeError):
    """Raised when the platform file is not a LaunchBox document."""


def parse_document(root: ET.Element) -> CatalogDocument:
    if root.tag != ROOT_TAG:
        raise CatalogFormatError(f"Expected <{ROOT_TAG}> root, found <{root.tag}>")

    games: list[CatalogEntry] = []
    custom_fields: list[CustomField] = []
    passthrough: list[str] = []
    for child in root:
        if child.tag == GAME_TAG:
            games.append(CatalogEntry({field.tag: field.text or "" for field in child}))
        elif child.tag == CUSTOM_FIELD_TAG:
            game_id, name, value = (child.findtext(part) or "" for part in _CUSTOM_FIELD_PARTS)
            custom_fields.append(CustomField(game_id=game_id, name=name, value=value))
        else:
            child.tail = None
            passthrough.append(ET.tostring(child, encoding="unicode"))
    return CatalogDocument(
        games=tuple(games),
        custom_fields=tuple(custom_fields),
        passthrough=tuple(passthrough),
    )


def build_tree(document: CatalogDocument) -> ET.ElementTree:
    root = ET.Element(ROOT_TAG)
    for entry in document.games:
        game = ET.SubElement(root, GAME_TAG)
        for name, value in entry.fields.items():
            ET.SubElement(game, name).text = value or None
    for fragment in document.passthrough:
        root.append(ET.fromstring(fragment))
    for custom in document.custom_fields:
        element = ET.SubElement(root, CUSTOM_FIELD_TAG)
        for part, value in zip(
            _CUSTOM_FIELD_PARTS, (custom.game_id, custom.name, custom.value), strict=True
        ):
            ET.SubElement(element, part).text = value or None
    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    return tree


class XmlCatalogStore:
    """One platform file, read and replaced as a whole."""

    def __init__(self, path: Path, *, backup_path: Path | None = None) -> None:
        self.path = path
        self.backup_path = backup_path

    def load(self) -> CatalogDocument | None:
        if not self.path.exists():
            log.info("%s does not exist yet", self.path)
            return None
        try:
            tree = ET.parse(self.path)
        except ET.ParseError as exc:
            raise CatalogFormatError(f"Cannot parse {self.path}: {exc}") from exc
        document = parse_document(tree.getroot())
        log.debug(
            "Loaded %s games and %s custom fields from %s",
            len(document.games),
            len(document.custom_fields),
            self.path,
        )
        return document

    def backup(self) -> Path | None:
        if self.backup_path is None or not self.path.exists():
            return None
        self.backup_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(self.path, self.backup_path)
        log.info("Backed up %s to %s", self.path, self.backup_path)
        return self.backup_path

    def save(self, document: CatalogDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(f"{self.path.name}.tmp")
        build_tree(document).write(staging, encoding="utf-8", xml_declaration=True)
        staging.replace(self.path)
        log.info("Wrote %s games to %s", len(document.games), self.path)
