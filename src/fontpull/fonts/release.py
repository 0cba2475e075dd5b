"""Persistence of the last-seen remote release identifier."""

from __future__ import annotations

from pathlib import Path


def is_stale(cached: str | None, fetched: str) -> bool:
    """Return whether ``fetched`` differs from the cached identifier.

    A missing cache value always counts as stale.
    """
    if cached is None:
        return True
    return cached != fetched


class ReleaseCache:
    """Single-value file holding the release tag seen by the previous run."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> str | None:
        """Return the cached identifier, or ``None`` when nothing is recorded."""
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return value or None

    def write(self, release: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{release}\n", encoding="utf-8")

    def is_stale(self, fetched: str) -> bool:
        return is_stale(self.read(), fetched)


def read_cached_release(path: Path) -> str | None:
    return ReleaseCache(path).read()


def write_cached_release(path: Path, release: str) -> None:
    ReleaseCache(path).write(release)


__all__ = ["ReleaseCache", "is_stale", "read_cached_release", "write_cached_release"]
