from __future__ import annotations

from pathlib import Path

from fontpull.fonts.catalog import fetch_installed_fonts
from fontpull.fonts.records import (
    FileInstalledStore,
    InstalledFonts,
    InstalledStore,
    MemoryInstalledStore,
)


def test_missing_record_is_empty(tmp_path: Path) -> None:
    installed = fetch_installed_fonts(tmp_path / "installed.txt")
    assert len(installed) == 0
    assert installed.names() == frozenset()


def test_add_appends_immediately(tmp_path: Path) -> None:
    path = tmp_path / "installed.txt"
    installed = InstalledFonts(FileInstalledStore(path))

    assert installed.add("Hack")
    assert path.read_text(encoding="utf-8") == "Hack\n"
    assert installed.add("FiraCode")
    assert not installed.add("Hack")

    assert path.read_text(encoding="utf-8").splitlines() == ["Hack", "FiraCode"]
    assert list(fetch_installed_fonts(path)) == ["Hack", "FiraCode"]


def test_record_ignores_blank_lines_and_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "installed.txt"
    path.write_text("Hack\n\n  Agave \nHack\n", encoding="utf-8")

    installed = fetch_installed_fonts(path)

    assert list(installed) == ["Hack", "Agave"]
    assert "Agave" in installed
    assert "agave" not in installed


def test_discard_rewrites_and_clear_empties(tmp_path: Path) -> None:
    path = tmp_path / "installed.txt"
    installed = InstalledFonts(FileInstalledStore(path))
    for name in ("Hack", "Agave", "3270"):
        installed.add(name)

    assert installed.discard("Agave")
    assert not installed.discard("Agave")
    assert path.read_text(encoding="utf-8").splitlines() == ["Hack", "3270"]

    installed.clear()
    assert path.read_text(encoding="utf-8") == ""
    assert len(installed) == 0


def test_memory_store_satisfies_protocol() -> None:
    store = MemoryInstalledStore(["Hack"])
    assert isinstance(store, InstalledStore)

    installed = fetch_installed_fonts(store)
    installed.add("Agave")
    assert store.lines == ["Hack", "Agave"]
