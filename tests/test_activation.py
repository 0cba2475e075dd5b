from __future__ import annotations

from pathlib import Path
import shutil
import subprocess
import sys

import pytest

from fontpull.core.exceptions import DependencyMissingError
from fontpull.fonts import activation
from fontpull.fonts.activation import (
    FontBrowser,
    TermuxFontHook,
    check_dependencies,
    refresh_font_cache,
    required_tools,
)


def _font_tree(root: Path) -> Path:
    (root / "Hack").mkdir(parents=True)
    (root / "Hack" / "HackNerdFont-Regular.ttf").write_bytes(b"hack")
    (root / "Hack" / "README.md").write_text("readme", encoding="utf-8")
    (root / "Agave" / "nested").mkdir(parents=True)
    (root / "Agave" / "nested" / "AgaveNerdFont-Bold.otf").write_bytes(b"agave")
    return root


def test_check_dependencies_reports_every_missing_tool(monkeypatch) -> None:
    monkeypatch.setattr(shutil, "which", lambda tool: None if tool != "present" else "/bin/x")

    with pytest.raises(DependencyMissingError) as excinfo:
        check_dependencies(["fc-cache", "present", "unzip"])

    assert excinfo.value.tools == ("fc-cache", "unzip")
    assert "fc-cache, unzip" in str(excinfo.value)


def test_required_tools_depend_on_host(monkeypatch) -> None:
    monkeypatch.delenv("TERMUX_VERSION", raising=False)
    monkeypatch.setenv("PREFIX", "/usr")
    monkeypatch.setattr(sys, "platform", "linux")
    assert required_tools() == ("fc-cache",)

    monkeypatch.setattr(sys, "platform", "darwin")
    assert required_tools() == ()

    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("TERMUX_VERSION", "0.118")
    assert required_tools() == ()


def test_refresh_font_cache_runs_fc_cache(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TERMUX_VERSION", raising=False)
    monkeypatch.setenv("PREFIX", "/usr")
    monkeypatch.setattr(sys, "platform", "linux")
    calls: list[list[str]] = []

    def runner(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0)

    assert refresh_font_cache(tmp_path, runner=runner)
    assert calls == [["fc-cache", "-f", str(tmp_path)]]

    def failing(command, **kwargs):
        raise subprocess.CalledProcessError(1, command)

    assert not refresh_font_cache(tmp_path, runner=failing)


def test_browser_walks_tree_iteratively(tmp_path: Path) -> None:
    root = _font_tree(tmp_path / "fonts")
    browser = FontBrowser(root)
    seen: list[list[str]] = []
    script = iter([0, None, 0, 0, 0])

    def chooser(directory: Path, entries):
        seen.append([entry.name for entry in entries])
        return next(script)

    picked = browser.browse(chooser)

    assert picked == root / "Agave" / "nested" / "AgaveNerdFont-Bold.otf"
    assert seen[0] == ["Agave", "Hack"]
    assert seen[1] == ["nested"]
    assert seen[2] == ["Agave", "Hack"]


def test_browser_filters_non_font_files(tmp_path: Path) -> None:
    root = _font_tree(tmp_path / "fonts")
    browser = FontBrowser(root)

    assert browser.select(1) is None
    assert [entry.name for entry in browser.entries()] == ["HackNerdFont-Regular.ttf"]
    assert browser.back()
    assert not browser.back()


def test_browser_returns_none_when_leaving_root(tmp_path: Path) -> None:
    root = _font_tree(tmp_path / "fonts")

    assert FontBrowser(root).browse(lambda directory, entries: None) is None


def test_termux_hook_copies_font_and_reloads(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(activation.shutil, "which", lambda tool: f"/usr/bin/{tool}")
    font = tmp_path / "Hack.ttf"
    font.write_bytes(b"hack")
    calls: list[list[str]] = []

    def runner(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0)

    target = TermuxFontHook(home=tmp_path / "home", runner=runner).activate(font)

    assert target == tmp_path / "home" / ".termux" / "font.ttf"
    assert target.read_bytes() == b"hack"
    assert calls == [["termux-reload-settings"]]


def test_termux_hook_requires_reload_tool(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(activation.shutil, "which", lambda tool: None)
    font = tmp_path / "Hack.ttf"
    font.write_bytes(b"hack")

    with pytest.raises(DependencyMissingError):
        TermuxFontHook(home=tmp_path).activate(font)
