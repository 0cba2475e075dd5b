from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import random
import zipfile

from fontpull.core.exceptions import CatalogFetchError, DownloadError


FONTS = ("0xProto", "3270", "Agave", "FiraCode", "Hack")


def build_font_zip(target: Path, font: str) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(target, "w") as archive:
        archive.writestr(f"{font}NerdFont-Regular.ttf", b"regular")
        archive.writestr(f"{font}NerdFontMono-Bold.otf", b"bold")
        archive.writestr("LICENSE", "OFL")
    return target


def build_damaged_zip(target: Path, font: str) -> Path:
    """Write a zip whose headers are valid but whose deflate stream is garbage."""
    member = f"{font}NerdFont-Regular.ttf"
    target.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(member, random.Random(font).randbytes(8192))
    payload = bytearray(target.read_bytes())
    # Local header is 30 bytes plus the member name; no extra field is written.
    start = 30 + len(member.encode())
    payload[start : start + 16] = b"\xff" * 16
    target.write_bytes(bytes(payload))
    return target


class FakeCatalogClient:
    """Stand-in for ``CatalogClient`` recording every remote call."""

    def __init__(
        self,
        *,
        release: str | None = "v3.2.1",
        fonts: Iterable[str] = FONTS,
        missing: Iterable[str] = (),
        failing: Iterable[str] = (),
        corrupt: Iterable[str] = (),
        damaged: Iterable[str] = (),
    ) -> None:
        self.release = release
        self.fonts = tuple(fonts)
        self.missing = set(missing)
        self.failing = set(failing)
        self.corrupt = set(corrupt)
        self.damaged = set(damaged)
        self.downloads: list[tuple[str, str]] = []
        self.probes: list[str] = []
        self.existing_before_download: list[bool] = []
        self.progress_totals: list[int | None] = []

    def fetch_latest_release(self) -> str:
        if self.release is None:
            raise CatalogFetchError("Unable to fetch the latest release: offline")
        return self.release

    def fetch_all_fonts(self) -> tuple[str, ...]:
        return self.fonts

    def font_archive_exists(self, name: str, release: str) -> bool:
        self.probes.append(name)
        return name in self.fonts and name not in self.missing

    def download_archive(
        self,
        name: str,
        release: str,
        destination: Path,
        *,
        progress=None,
    ) -> Path:
        self.downloads.append((name, release))
        self.existing_before_download.append(destination.exists())
        if name in self.failing:
            raise DownloadError(name, f"Unable to download {name}: 404")
        if name in self.corrupt:
            destination.write_bytes(b"not a zip")
        elif name in self.damaged:
            build_damaged_zip(destination, name)
        else:
            build_font_zip(destination, name)
        if progress is not None:
            size = destination.stat().st_size
            self.progress_totals.append(size)
            with progress(size) as advance:
                advance(size)
        return destination


