"""Host integration: dependency checks, font cache refresh and activation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import os
from pathlib import Path
import shutil
import subprocess
import sys
from typing import Protocol

from fontpull.core.exceptions import DependencyMissingError
from fontpull.fonts.pipeline import FONT_SUFFIXES


Runner = Callable[..., subprocess.CompletedProcess]


def is_termux() -> bool:
    return "TERMUX_VERSION" in os.environ or "com.termux" in os.environ.get("PREFIX", "")


def required_tools() -> tuple[str, ...]:
    """Return the external tools needed on this host."""
    if is_termux():
        return ()
    if sys.platform.startswith("linux"):
        return ("fc-cache",)
    return ()


def check_dependencies(tools: Iterable[str] | None = None) -> None:
    """Raise ``DependencyMissingError`` when any tool is absent from PATH."""
    wanted = required_tools() if tools is None else tuple(tools)
    missing = [tool for tool in wanted if shutil.which(tool) is None]
    if missing:
        raise DependencyMissingError(missing)


def refresh_font_cache(directory: Path, *, runner: Runner = subprocess.run) -> bool:
    """Ask fontconfig to rescan ``directory``. Returns ``False`` on failure."""
    if not sys.platform.startswith("linux") or is_termux():
        return True
    try:
        runner(["fc-cache", "-f", str(directory)], check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


class FontTree(Protocol):
    """Capabilities needed to walk an installed font tree."""

    def list_entries(self, directory: Path) -> list[Path]: ...

    def is_directory(self, entry: Path) -> bool: ...


class LocalFontTree:
    """``FontTree`` over the local filesystem listing folders and font files."""

    def list_entries(self, directory: Path) -> list[Path]:
        entries = [
            entry
            for entry in directory.iterdir()
            if entry.is_dir() or entry.suffix.lower() in FONT_SUFFIXES
        ]
        return sorted(entries, key=lambda entry: (not entry.is_dir(), entry.name.lower()))

    def is_directory(self, entry: Path) -> bool:
        return entry.is_dir()


Chooser = Callable[[Path, Sequence[Path]], "int | None"]


class FontBrowser:
    """Cursor over a font tree kept on an explicit stack.

    ``select`` descends into directories and returns files; ``back`` climbs
    one level. Depth is bounded by the stack, not by the call stack.
    """

    def __init__(self, root: Path, tree: FontTree | None = None) -> None:
        self.tree = tree or LocalFontTree()
        self._stack: list[Path] = [root]

    @property
    def current(self) -> Path:
        return self._stack[-1]

    def entries(self) -> list[Path]:
        return self.tree.list_entries(self.current)

    def is_directory(self, entry: Path) -> bool:
        return self.tree.is_directory(entry)

    def select(self, index: int) -> Path | None:
        """Descend into the entry at ``index`` or return it when it is a file."""
        entry = self.entries()[index]
        if self.is_directory(entry):
            self._stack.append(entry)
            return None
        return entry

    def back(self) -> bool:
        if len(self._stack) == 1:
            return False
        self._stack.pop()
        return True

    def browse(self, chooser: Chooser) -> Path | None:
        """Drive the cursor with ``chooser`` until a file is picked.

        ``chooser`` receives the current directory and its entries and returns
        an index, or ``None`` to go up. Going up from the root ends the walk.
        """
        while True:
            entries = self.entries()
            choice = chooser(self.current, entries) if entries else None
            if choice is None:
                if not self.back():
                    return None
                continue
            if not 0 <= choice < len(entries):
                continue
            picked = self.select(choice)
            if picked is not None:
                return picked


class TermuxFontHook:
    """Apply a font file as the Termux terminal font."""

    reload_command = "termux-reload-settings"

    def __init__(self, home: Path | None = None, *, runner: Runner = subprocess.run) -> None:
        self.home = home or Path.home()
        self.runner = runner

    @property
    def target(self) -> Path:
        return self.home / ".termux" / "font.ttf"

    def activate(self, font_file: Path) -> Path:
        check_dependencies([self.reload_command])
        self.target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(font_file, self.target)
        self.runner([self.reload_command], check=True)
        return self.target


__all__ = [
    "FontBrowser",
    "FontTree",
    "LocalFontTree",
    "TermuxFontHook",
    "check_dependencies",
    "is_termux",
    "refresh_font_cache",
    "required_tools",
]
