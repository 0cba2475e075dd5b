from __future__ import annotations

from pathlib import Path
import sys

from fontpull.core.config import InstallerConfig
from fontpull.core.user_dir import user_dir_context


def test_user_dir_respects_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FONTPULL_HOME", str(tmp_path / "home-root"))
    monkeypatch.setenv("FONTPULL_CACHE_DIR", str(tmp_path / "cache-root"))
    monkeypatch.setenv("FONTPULL_FONTS_DIR", str(tmp_path / "fonts-root"))

    with user_dir_context():
        config = InstallerConfig.from_environment()

    assert config.data_dir == tmp_path / "home-root"
    assert config.download_dir == tmp_path / "cache-root" / "downloads"
    assert config.install_dir == tmp_path / "fonts-root"
    assert config.release_file == tmp_path / "home-root" / "release.txt"
    assert config.installed_file == tmp_path / "home-root" / "installed.txt"


def test_cache_root_defaults_under_custom_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FONTPULL_CACHE_DIR", raising=False)
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    custom_root = tmp_path / "custom-home"
    with user_dir_context(root=custom_root) as user_dir:
        assert user_dir.cache_root == custom_root / "cache"


def test_fonts_root_follows_xdg_data_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FONTPULL_FONTS_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))
    monkeypatch.setattr(sys, "platform", "linux")

    with user_dir_context(root=tmp_path / "home") as user_dir:
        assert user_dir.fonts_root == tmp_path / "share" / "fonts" / "NerdFonts"


def test_config_overrides_and_flags(user_dir) -> None:
    config = InstallerConfig.from_environment(repository="me/fonts", force=None)

    assert config.repository == "me/fonts"
    assert not config.force
    assert config.font_dir("Hack") == user_dir.fonts_root / "Hack"
    assert config.archive_path("Hack") == user_dir.cache_root / "downloads" / "Hack.zip"

    flagged = config.with_flags(force=True, keep_archives=True)
    assert flagged.force and flagged.keep_archives
    assert not config.force


def test_cache_dir_creates_only_when_asked(user_dir) -> None:
    lazy = user_dir.cache_dir("downloads", create=False)
    assert lazy == user_dir.cache_root / "downloads"
    assert not lazy.exists()

    assert user_dir.cache_dir("downloads").is_dir()
