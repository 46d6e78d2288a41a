from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gamecurator.adapters.launchbox import CatalogFormatError, XmlCatalogStore
from gamecurator.domain.model import CatalogDocument, CatalogEntry, CustomField

if TYPE_CHECKING:
    from pathlib import Path

PLATFORM_XML = """<?xml version="1.0" standalone="yes"?>
<LaunchBox>
  <Game>
    <ID>abc</ID>
    <Title>Amazing Game</Title>
    <SortTitle>RJ123456</SortTitle>
    <Notes />
    <PlayCount>3</PlayCount>
  </Game>
  <AlternateName>
    <Name>別名</Name>
    <GameId>abc</GameId>
  </AlternateName>
  <CustomField>
    <GameID>abc</GameID>
    <Name>engine</Name>
    <Value>rpgmaker</Value>
  </CustomField>
</LaunchBox>
"""


@pytest.fixture
def platform_file(tmp_path: Path) -> Path:
    path = tmp_path / "Data" / "Platforms" / "Windows.xml"
    path.parent.mkdir(parents=True)
    path.write_text(PLATFORM_XML, encoding="utf-8")
    return path


def test_load_reads_games_custom_fields_and_passthrough(platform_file: Path) -> None:
    document = XmlCatalogStore(platform_file).load()

    assert document is not None
    (entry,) = document.games
    assert list(entry.fields) == ["ID", "Title", "SortTitle", "Notes", "PlayCount"]
    assert entry.get("Notes") == ""
    assert entry.get("PlayCount") == "3"
    assert document.custom_fields == (CustomField("abc", "engine", "rpgmaker"),)
    assert len(document.passthrough) == 1
    assert "<GameId>abc</GameId>" in document.passthrough[0]


def test_missing_file_loads_as_none(tmp_path: Path) -> None:
    assert XmlCatalogStore(tmp_path / "missing.xml").load() is None


def test_rejects_other_documents(tmp_path: Path) -> None:
    wrong_root = tmp_path / "wrong.xml"
    wrong_root.write_text("<Games />", encoding="utf-8")
    broken = tmp_path / "broken.xml"
    broken.write_text("<LaunchBox><Game>", encoding="utf-8")

    with pytest.raises(CatalogFormatError, match="root"):
        XmlCatalogStore(wrong_root).load()
    with pytest.raises(CatalogFormatError, match="Cannot parse"):
        XmlCatalogStore(broken).load()


def test_save_is_stable_across_reloads(platform_file: Path) -> None:
    store = XmlCatalogStore(platform_file)
    document = store.load()
    assert document is not None

    store.save(document)
    first = platform_file.read_bytes()
    reloaded = store.load()
    assert reloaded == document
    store.save(reloaded)

    assert platform_file.read_bytes() == first
    assert not platform_file.with_name("Windows.xml.tmp").exists()


def test_save_creates_new_file(tmp_path: Path) -> None:
    path = tmp_path / "Platforms" / "Windows.xml"
    store = XmlCatalogStore(path)
    document = CatalogDocument(
        games=(CatalogEntry({"ID": "x", "Title": "A & B"}),),
        custom_fields=(CustomField("x", "canonicalId", "RJ1"),),
    )

    store.save(document)

    assert store.load() == document
    assert b"A &amp; B" in path.read_bytes()


def test_backup_copies_existing_file(platform_file: Path, tmp_path: Path) -> None:
    backup = tmp_path / "backup" / "Windows.xml"

    assert XmlCatalogStore(tmp_path / "missing.xml", backup_path=backup).backup() is None
    assert XmlCatalogStore(platform_file).backup() is None
    assert XmlCatalogStore(platform_file, backup_path=backup).backup() == backup
    assert backup.read_text(encoding="utf-8") == PLATFORM_XML
