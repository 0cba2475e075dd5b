"""Centralised resolution of the fontpull data, cache and font directories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import os
from pathlib import Path
import sys
from threading import RLock


__all__ = [
    "FontpullUserDir",
    "configure_user_dir",
    "get_user_dir",
    "set_user_dir",
    "user_dir_context",
]

FONTS_SUBDIR = "NerdFonts"

_USER_DIR: FontpullUserDir | None = None
_LOCK: RLock = RLock()


def _resolve_root(root: str | Path | None) -> tuple[Path, bool]:
    if root is not None:
        return Path(root).expanduser(), True
    env_root = os.environ.get("FONTPULL_HOME")
    if env_root:
        return Path(env_root).expanduser(), True
    return Path.home() / ".fontpull", False


def _resolve_cache_root(
    cache_root: str | Path | None,
    *,
    user_root: Path,
    root_was_explicit: bool,
) -> tuple[Path, bool]:
    if cache_root is not None:
        return Path(cache_root).expanduser(), True
    env_cache = os.environ.get("FONTPULL_CACHE_DIR")
    if env_cache:
        return Path(env_cache).expanduser(), True
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache).expanduser() / "fontpull", True
    if root_was_explicit:
        return user_root / "cache", True
    return Path.home() / ".cache" / "fontpull", False


def _resolve_fonts_root(fonts_root: str | Path | None) -> tuple[Path, bool]:
    if fonts_root is not None:
        return Path(fonts_root).expanduser(), True
    env_fonts = os.environ.get("FONTPULL_FONTS_DIR")
    if env_fonts:
        return Path(env_fonts).expanduser(), True
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Fonts" / FONTS_SUBDIR, False
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data).expanduser() / "fonts" / FONTS_SUBDIR, True
    return Path.home() / ".local" / "share" / "fonts" / FONTS_SUBDIR, False


@dataclass(slots=True)
class FontpullUserDir:
    """Resolved roots plus helpers to manage them.

    ``root`` holds the durable records (release tag, installed fonts),
    ``cache_root`` the transient archive downloads and ``fonts_root`` the
    extracted font packages.
    """

    root: Path
    cache_root: Path
    fonts_root: Path
    root_is_explicit: bool = False
    cache_is_explicit: bool = False
    fonts_is_explicit: bool = False

    def cache_dir(self, *parts: str | Path, create: bool = True) -> Path:
        """Return a directory under the cache root, creating it when requested."""
        target = self.cache_root.joinpath(*parts)
        if create:
            target.mkdir(parents=True, exist_ok=True)
        return target


def configure_user_dir(
    *,
    root: str | Path | None = None,
    cache_root: str | Path | None = None,
    fonts_root: str | Path | None = None,
) -> FontpullUserDir:
    """Replace the global user dir singleton with a freshly resolved instance."""
    user_root, root_was_explicit = _resolve_root(root)
    resolved_cache_root, cache_was_explicit = _resolve_cache_root(
        cache_root, user_root=user_root, root_was_explicit=root_was_explicit
    )
    resolved_fonts_root, fonts_was_explicit = _resolve_fonts_root(fonts_root)
    return set_user_dir(
        FontpullUserDir(
            root=user_root,
            cache_root=resolved_cache_root,
            fonts_root=resolved_fonts_root,
            root_is_explicit=root_was_explicit,
            cache_is_explicit=cache_was_explicit,
            fonts_is_explicit=fonts_was_explicit,
        )
    )


def get_user_dir() -> FontpullUserDir:
    """Return the lazily created user dir singleton.

    Implicit roots are re-resolved on each call so environment changes made
    after the first lookup (tests, wrappers) are honoured.
    """
    global _USER_DIR
    with _LOCK:
        if _USER_DIR is None:
            _USER_DIR = configure_user_dir()
            return _USER_DIR
        current_root, root_was_explicit = _resolve_root(None)
        current_cache_root, cache_was_explicit = _resolve_cache_root(
            None, user_root=current_root, root_was_explicit=root_was_explicit
        )
        current_fonts_root, fonts_was_explicit = _resolve_fonts_root(None)
        if (
            (not _USER_DIR.root_is_explicit and _USER_DIR.root != current_root)
            or (not _USER_DIR.cache_is_explicit and _USER_DIR.cache_root != current_cache_root)
            or (not _USER_DIR.fonts_is_explicit and _USER_DIR.fonts_root != current_fonts_root)
        ):
            _USER_DIR = FontpullUserDir(
                root=current_root,
                cache_root=current_cache_root,
                fonts_root=current_fonts_root,
                root_is_explicit=root_was_explicit,
                cache_is_explicit=cache_was_explicit,
                fonts_is_explicit=fonts_was_explicit,
            )
        return _USER_DIR


def set_user_dir(user_dir: FontpullUserDir) -> FontpullUserDir:
    """Replace the current user dir singleton and return it."""
    global _USER_DIR
    with _LOCK:
        _USER_DIR = user_dir
        return _USER_DIR


@contextmanager
def user_dir_context(
    *,
    root: str | Path | None = None,
    cache_root: str | Path | None = None,
    fonts_root: str | Path | None = None,
) -> Iterator[FontpullUserDir]:
    """Temporarily override the global user dir singleton."""
    global _USER_DIR
    with _LOCK:
        previous = _USER_DIR
    current = configure_user_dir(root=root, cache_root=cache_root, fonts_root=fonts_root)
    try:
        yield current
    finally:
        with _LOCK:
            _USER_DIR = previous
