"""Install orchestration shared by the CLI and embedding integrations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import shutil

from fontpull.core.config import InstallerConfig
from fontpull.core.exceptions import InvalidSelectionError
from fontpull.fonts.catalog import CatalogClient, CatalogSync, SyncResult, offerable
from fontpull.fonts.logging import FontPipelineLogger
from fontpull.fonts.pipeline import InstallPipeline, InstallReport, cleanup_archives
from fontpull.fonts.records import FileInstalledStore, InstalledFonts, InstalledStore
from fontpull.fonts.release import ReleaseCache
from fontpull.fonts.selection import (
    Selection,
    is_plain_name,
    parse_direct_selection,
    prompt_selection,
    validate_direct_selection,
)


__all__ = [
    "DirectPlan",
    "InstallOutcome",
    "InstallerService",
    "MenuPlan",
    "UninstallResult",
]


@dataclass(frozen=True, slots=True)
class MenuPlan:
    """Fonts the menu offers for the current release."""

    sync: SyncResult
    catalog: tuple[str, ...]
    options: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DirectPlan:
    """Validated direct-install request."""

    sync: SyncResult
    selection: Selection
    skipped: tuple[str, ...] = ()


@dataclass(slots=True)
class InstallOutcome:
    """Install report plus archive bookkeeping."""

    selection: Selection
    report: InstallReport
    removed_archives: list[Path] = field(default_factory=list)
    kept_archives: Path | None = None


@dataclass(frozen=True, slots=True)
class UninstallResult:
    removed: tuple[str, ...]
    unknown: tuple[str, ...]


class InstallerService:
    """Drive catalog sync, selection and the install pipeline for one run."""

    def __init__(
        self,
        config: InstallerConfig,
        *,
        client: CatalogClient | None = None,
        store: InstalledStore | None = None,
        releases: ReleaseCache | None = None,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.config = config
        self.client = client or CatalogClient(config)
        self.installed = InstalledFonts(store or FileInstalledStore(config.installed_file))
        self.releases = releases or ReleaseCache(config.release_file)
        self.logger = logger or FontPipelineLogger()
        self._sync = CatalogSync(self.client, self.releases, self.installed, logger=self.logger)

    def synchronise(self) -> SyncResult:
        return self._sync.synchronise(force=self.config.force)

    def plan_menu(self) -> MenuPlan:
        """Synchronise and compute the offerable fonts."""
        sync = self.synchronise()
        catalog = self.client.fetch_all_fonts()
        options = offerable(catalog, self.installed, sync.stale, self.config.force)
        return MenuPlan(sync=sync, catalog=catalog, options=options)

    def choose(
        self,
        plan: MenuPlan,
        ask: Callable[[], str],
        *,
        on_invalid: Callable[[InvalidSelectionError], None] | None = None,
    ) -> Selection:
        return prompt_selection(plan.options, ask, on_invalid=on_invalid)

    def plan_direct(self, names: str | Sequence[str]) -> DirectPlan:
        """Synchronise and validate every requested name before any download.

        Names already recorded as installed are skipped unless this run is
        forced or the release changed.
        """
        requested = parse_direct_selection(names) if isinstance(names, str) else tuple(names)
        sync = self.synchronise()
        selection = validate_direct_selection(
            requested, sync.release, self.client.font_archive_exists
        )
        skipped: tuple[str, ...] = ()
        if not sync.cleared:
            skipped = tuple(name for name in selection if name in self.installed)
            selection = selection.without(skipped)
        return DirectPlan(sync=sync, selection=selection, skipped=skipped)

    def install(self, selection: Selection, release: str) -> InstallOutcome:
        """Run the pipeline then apply the archive retention policy."""
        pipeline = InstallPipeline(self.config, self.client, self.installed, logger=self.logger)
        report = pipeline.run(selection, release)
        removed = cleanup_archives(self.config, selection, report)
        kept = self.config.download_dir if self.config.keep_archives and report.attempted else None
        return InstallOutcome(
            selection=selection,
            report=report,
            removed_archives=removed,
            kept_archives=kept,
        )

    def update(self) -> InstallOutcome | None:
        """Reinstall recorded fonts when the release changed (or when forced).

        Returns ``None`` when everything is already current.
        """
        previous = Selection.of(self.installed)
        sync = self.synchronise()
        if not sync.cleared:
            return None
        if not previous:
            return InstallOutcome(selection=previous, report=InstallReport())
        return self.install(previous, sync.release)

    def uninstall(self, names: str | Sequence[str]) -> UninstallResult:
        """Remove font directories and forget them in the installed record."""
        requested = parse_direct_selection(names) if isinstance(names, str) else tuple(names)
        removed: list[str] = []
        unknown: list[str] = []
        for name in requested:
            if not is_plain_name(name):
                unknown.append(name)
                continue
            directory = self.config.font_dir(name)
            recorded = self.installed.discard(name)
            if directory.is_dir():
                shutil.rmtree(directory)
            elif not recorded:
                unknown.append(name)
                continue
            removed.append(name)
        return UninstallResult(removed=tuple(removed), unknown=tuple(unknown))
