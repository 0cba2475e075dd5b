from __future__ import annotations

import importlib

from helpers import FakeCatalogClient
import pytest
from typer.testing import CliRunner

from fontpull.api.service import InstallerService
from fontpull.core.config import InstallerConfig
from fontpull.core.exceptions import DependencyMissingError
from fontpull.fonts.records import MemoryInstalledStore
from fontpull.fonts.release import ReleaseCache
from fontpull.ui.cli import app


install_module = importlib.import_module("fontpull.ui.cli.commands.install")


@pytest.fixture
def store() -> MemoryInstalledStore:
    return MemoryInstalledStore()


@pytest.fixture
def wire(monkeypatch, user_dir, client: FakeCatalogClient, store: MemoryInstalledStore):
    """Route the command to the fake client and in-memory record."""
    built: list[InstallerService] = []

    def fake_build(config: InstallerConfig) -> InstallerService:
        service = InstallerService(config, client=client, store=store)
        built.append(service)
        return service

    monkeypatch.setattr(install_module, "build_service", fake_build)
    monkeypatch.setattr(install_module, "check_dependencies", lambda tools=None: None)
    monkeypatch.setattr(install_module, "refresh_font_cache", lambda directory: True)
    return built


def test_menu_quit_is_goodbye(wire, client: FakeCatalogClient) -> None:
    result = CliRunner().invoke(app, [], input="q\n")

    assert result.exit_code == 0, result.output
    assert "Goodbye" in result.output
    assert client.downloads == []


def test_menu_reprompts_after_invalid_line(wire, client, store, user_dir) -> None:
    result = CliRunner().invoke(app, [], input="6\n2-1\n1,3-5\n")

    assert result.exit_code == 0, result.output
    assert result.output.count("Invalid selection") == 2
    assert [name for name, _ in client.downloads] == ["0xProto", "Agave", "FiraCode", "Hack"]
    assert store.lines == ["0xProto", "Agave", "FiraCode", "Hack"]
    assert list((user_dir.cache_root / "downloads").glob("*.zip")) == []


def test_menu_blank_line_is_fatal(wire, client) -> None:
    result = CliRunner().invoke(app, [], input="\n")

    assert result.exit_code == 1
    assert "No fonts selected" in result.output
    assert client.downloads == []


def test_menu_with_everything_installed(wire, store, user_dir) -> None:
    ReleaseCache(user_dir.root / "release.txt").write("v3.2.1")
    store.lines = ["0xProto", "3270", "Agave", "FiraCode", "Hack"]

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 0
    assert "already installed" in result.output


def test_direct_install_rejects_unknown_names(wire, client) -> None:
    result = CliRunner().invoke(app, ["--install", "Hack,NotAFont"])

    assert result.exit_code == 1
    assert "NotAFont" in result.output
    assert client.downloads == []


def test_direct_install_keeps_archives(wire, client, store, user_dir) -> None:
    result = CliRunner().invoke(app, ["-i", "Hack", "-k"])

    assert result.exit_code == 0, result.output
    assert store.lines == ["Hack"]
    assert (user_dir.cache_root / "downloads" / "Hack.zip").exists()
    assert (user_dir.fonts_root / "Hack" / "HackNerdFont-Regular.ttf").exists()
    assert "Archives kept" in result.output


def test_direct_install_reports_failures_and_continues(wire, client, store) -> None:
    client.failing = {"Agave"}

    result = CliRunner().invoke(app, ["-i", "Agave,Hack"])

    assert result.exit_code == 0
    assert store.lines == ["Hack"]
    assert "Agave" in result.output


def test_catalog_failure_is_fatal(wire, client) -> None:
    client.release = None

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "Unable to fetch" in result.output


def test_missing_dependency_aborts(wire, monkeypatch, client) -> None:
    def missing(tools=None):
        raise DependencyMissingError(["fc-cache"])

    monkeypatch.setattr(install_module, "check_dependencies", missing)

    result = CliRunner().invoke(app, ["-i", "Hack"])

    assert result.exit_code == 1
    assert "fc-cache" in result.output
    assert client.probes == []


def test_list_installed(wire, store) -> None:
    store.lines = ["Hack", "Agave"]

    result = CliRunner().invoke(app, ["-l"])

    assert result.exit_code == 0
    assert "Agave" in result.output and "Hack" in result.output


def test_list_available_marks_installed(wire, store) -> None:
    store.lines = ["Hack"]

    result = CliRunner().invoke(app, ["--list-available"])

    assert result.exit_code == 0
    assert "FiraCode" in result.output
    assert "yes" in result.output


def test_uninstall(wire, store, user_dir) -> None:
    store.lines = ["Hack"]
    (user_dir.fonts_root / "Hack").mkdir(parents=True)

    result = CliRunner().invoke(app, ["-U", "Hack,Agave"])

    assert result.exit_code == 0
    assert store.lines == []
    assert "Agave is not installed" in result.output


def test_update_when_current(wire, store, user_dir, client) -> None:
    ReleaseCache(user_dir.root / "release.txt").write("v3.2.1")
    store.lines = ["Hack"]

    result = CliRunner().invoke(app, ["-u"])

    assert result.exit_code == 0
    assert "up to date" in result.output
    assert client.downloads == []
