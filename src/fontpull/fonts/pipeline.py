"""Per-font download, extraction and bookkeeping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
import shutil
from typing import Protocol
import zipfile
import zlib

from fontpull.core.config import InstallerConfig
from fontpull.core.exceptions import ExtractError, FontInstallError
from fontpull.core.http import ProgressFactory
from fontpull.fonts.logging import FontPipelineLogger
from fontpull.fonts.records import InstalledFonts
from fontpull.fonts.selection import Selection


FONT_SUFFIXES = (".ttf", ".otf")


class ArchiveSource(Protocol):
    def download_archive(
        self,
        name: str,
        release: str,
        destination: Path,
        *,
        progress: ProgressFactory | None = None,
    ) -> Path: ...


@dataclass(slots=True)
class InstallReport:
    """Outcome of an install run.

    ``files`` maps each installed font to the font files it provides so host
    hooks can activate one of them.
    """

    attempted: bool = False
    installed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    files: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return bool(self.installed) and not self.failed


# Damaged member data surfaces from zlib/bz2/lzma rather than as BadZipFile;
# encrypted members raise RuntimeError, unknown methods NotImplementedError.
_EXTRACT_ERRORS = (
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    zipfile.BadZipFile,
    zlib.error,
)


def extract_archive(font: str, archive: Path, destination: Path) -> list[Path]:
    """Unpack ``archive`` into ``destination``, replacing previous contents.

    A failed extraction leaves no partial font directory behind.
    """
    try:
        if destination.exists():
            shutil.rmtree(destination)
        destination.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive) as bundle:
            bundle.extractall(destination)
    except _EXTRACT_ERRORS as exc:
        shutil.rmtree(destination, ignore_errors=True)
        raise ExtractError(font, f"Unable to extract {archive.name}: {exc}") from exc
    return font_files(destination)


def font_files(directory: Path) -> list[Path]:
    """Return the font files shipped under ``directory``."""
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in FONT_SUFFIXES
    )


class InstallPipeline:
    """Install each selected font sequentially, isolating per-font failures."""

    def __init__(
        self,
        config: InstallerConfig,
        source: ArchiveSource,
        installed: InstalledFonts,
        *,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.config = config
        self.source = source
        self.installed = installed
        self.logger = logger or FontPipelineLogger()

    def install(self, font: str, release: str) -> list[Path]:
        """Run download, extraction and record steps for one font."""
        archive = self.config.archive_path(font)
        # Downloads never overwrite in place.
        archive.unlink(missing_ok=True)

        self.logger.info("Downloading %s…", font)
        self.source.download_archive(
            font,
            release,
            archive,
            progress=partial(self.logger.progress, font),
        )
        self.logger.debug("Saved %s", archive)

        self.logger.info("Extracting %s…", font)
        files = extract_archive(font, archive, self.config.font_dir(font))
        self.installed.add(font)
        return files

    def run(self, selection: Selection, release: str) -> InstallReport:
        report = InstallReport()
        self.config.download_dir.mkdir(parents=True, exist_ok=True)
        self.config.install_dir.mkdir(parents=True, exist_ok=True)
        for font in selection:
            report.attempted = True
            try:
                files = self.install(font, release)
            except FontInstallError as exc:
                report.failed[font] = str(exc)
                self.logger.error("%s", exc, exception=exc)
                continue
            report.installed.append(font)
            report.files[font] = files
            self.logger.success("%s installed", font)
        return report


def cleanup_archives(
    config: InstallerConfig,
    fonts: Iterable[str],
    report: InstallReport,
) -> list[Path]:
    """Delete the staged archive of every selected font once anything was attempted."""
    if config.keep_archives or not report.attempted:
        return []
    removed: list[Path] = []
    for font in fonts:
        archive = config.archive_path(font)
        if archive.exists():
            archive.unlink()
            removed.append(archive)
    return removed


__all__ = [
    "ArchiveSource",
    "FONT_SUFFIXES",
    "InstallPipeline",
    "InstallReport",
    "cleanup_archives",
    "extract_archive",
    "font_files",
]
