"""Installed-font record backed by pluggable persistence adapters.

The record is a set of font names. Persistence is delegated to an
``InstalledStore`` so reconciliation and the install pipeline can run
against ``MemoryInstalledStore`` in tests and ``FileInstalledStore`` (one
name per line, appended as each install completes) in the CLI.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class InstalledStore(Protocol):
    """Persistence operations required by ``InstalledFonts``."""

    def read_all(self) -> list[str]: ...

    def append(self, name: str) -> None: ...

    def clear(self) -> None: ...

    def replace(self, names: Iterable[str]) -> None: ...


class FileInstalledStore:
    """Newline-delimited file store. A missing file reads as empty."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_all(self) -> list[str]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return [line.strip() for line in content.splitlines() if line.strip()]

    def append(self, name: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{name}\n")

    def clear(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")

    def replace(self, names: Iterable[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{name}\n" for name in names), encoding="utf-8")


class MemoryInstalledStore:
    """In-memory store used by tests and dry runs."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self.lines: list[str] = list(names)

    def read_all(self) -> list[str]:
        return list(self.lines)

    def append(self, name: str) -> None:
        self.lines.append(name)

    def clear(self) -> None:
        self.lines.clear()

    def replace(self, names: Iterable[str]) -> None:
        self.lines = list(names)


class InstalledFonts:
    """Set view over an ``InstalledStore`` that persists every mutation."""

    def __init__(self, store: InstalledStore) -> None:
        self.store = store
        self._names: dict[str, None] = dict.fromkeys(store.read_all())

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def names(self) -> frozenset[str]:
        return frozenset(self._names)

    def add(self, name: str) -> bool:
        """Record ``name``; returns ``False`` when it was already present."""
        if name in self._names:
            return False
        self.store.append(name)
        self._names[name] = None
        return True

    def discard(self, name: str) -> bool:
        """Forget ``name``, rewriting the store. Returns whether it was present."""
        if name not in self._names:
            return False
        del self._names[name]
        self.store.replace(self._names)
        return True

    def clear(self) -> None:
        self.store.clear()
        self._names.clear()


__all__ = [
    "FileInstalledStore",
    "InstalledFonts",
    "InstalledStore",
    "MemoryInstalledStore",
]
