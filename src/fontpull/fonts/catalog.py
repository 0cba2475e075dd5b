"""Remote catalog access and reconciliation against local records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests

from fontpull.core import http
from fontpull.core.config import InstallerConfig
from fontpull.core.exceptions import CatalogFetchError, DownloadError
from fontpull.fonts.records import FileInstalledStore, InstalledFonts, InstalledStore
from fontpull.fonts.release import ReleaseCache


if TYPE_CHECKING:  # pragma: no cover - typing only
    from fontpull.fonts.logging import FontPipelineLogger


logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
GITHUB_ROOT = "https://github.com"


class CatalogClient:
    """Query the release feed and archive endpoints of a font repository.

    Every call is a single attempt; failures surface as ``CatalogFetchError``
    or ``DownloadError`` for the caller to handle.
    """

    def __init__(
        self,
        config: InstallerConfig,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = http.create_session()
        return self._session

    @property
    def release_url(self) -> str:
        return f"{API_ROOT}/repos/{self.config.repository}/releases/latest"

    @property
    def contents_url(self) -> str:
        return (
            f"{API_ROOT}/repos/{self.config.repository}/contents/"
            f"{self.config.fonts_path}?ref={self.config.ref}"
        )

    def archive_url(self, name: str, release: str) -> str:
        return f"{GITHUB_ROOT}/{self.config.repository}/releases/download/{release}/{name}.zip"

    def _fetch_json(self, url: str, what: str) -> Any:
        try:
            return http.fetch_json(self.session, url, timeout=self.config.timeout)
        except (requests.RequestException, ValueError) as exc:
            raise CatalogFetchError(f"Unable to fetch {what} from {url}: {exc}") from exc

    def fetch_latest_release(self) -> str:
        """Return the tag naming the latest release."""
        payload = self._fetch_json(self.release_url, "the latest release")
        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag.strip():
            raise CatalogFetchError(f"Release payload from {self.release_url} has no tag name.")
        return tag.strip()

    def fetch_all_fonts(self) -> tuple[str, ...]:
        """Return every font package name in feed order."""
        payload = self._fetch_json(self.contents_url, "the font listing")
        if not isinstance(payload, list):
            raise CatalogFetchError(f"Font listing from {self.contents_url} is not a list.")
        names: dict[str, None] = {}
        for entry in payload:
            if not isinstance(entry, dict) or entry.get("type") != "dir":
                continue
            name = entry.get("name")
            if isinstance(name, str) and name:
                names.setdefault(name, None)
        return tuple(names)

    def font_archive_exists(self, name: str, release: str) -> bool:
        return http.url_exists(self.session, self.archive_url(name, release), timeout=self.config.timeout)

    def download_archive(
        self,
        name: str,
        release: str,
        destination: Path,
        *,
        progress: http.ProgressFactory | None = None,
    ) -> Path:
        url = self.archive_url(name, release)
        try:
            return http.download_file(
                self.session,
                url,
                destination,
                timeout=self.config.timeout,
                progress=progress,
            )
        except (requests.RequestException, OSError) as exc:
            raise DownloadError(name, f"Unable to download {name} from {url}: {exc}") from exc


def fetch_installed_fonts(source: Path | InstalledStore) -> InstalledFonts:
    """Load the installed record; a missing file yields an empty set."""
    store = FileInstalledStore(source) if isinstance(source, Path) else source
    return InstalledFonts(store)


def offerable(
    all_fonts: Sequence[str],
    installed: Iterable[str],
    stale: bool,
    force: bool,
) -> tuple[str, ...]:
    """Return the fonts to present for selection, in catalog order."""
    if stale or force:
        return tuple(all_fonts)
    excluded = set(installed)
    return tuple(name for name in all_fonts if name not in excluded)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of reconciling the remote release with the local records."""

    release: str
    previous: str | None
    stale: bool
    cleared: bool


class CatalogSync:
    """Apply release staleness and force policy to the local records.

    Stale or forced runs overwrite the cached release and clear the installed
    record so this run's installs rebuild it from scratch.
    """

    def __init__(
        self,
        client: CatalogClient,
        releases: ReleaseCache,
        installed: InstalledFonts,
        *,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.client = client
        self.releases = releases
        self.installed = installed
        self.logger = logger

    def synchronise(self, *, force: bool = False) -> SyncResult:
        release = self.client.fetch_latest_release()
        previous = self.releases.read()
        stale = self.releases.is_stale(release)
        if stale:
            self.releases.write(release)
            if self.logger is not None:
                if previous is None:
                    self.logger.debug("Recorded release %s", release)
                else:
                    self.logger.info("New release %s (was %s)", release, previous)
        cleared = stale or force
        if cleared:
            self.installed.clear()
        logger.debug("release=%s previous=%s stale=%s force=%s", release, previous, stale, force)
        return SyncResult(release=release, previous=previous, stale=stale, cleared=cleared)


__all__ = [
    "CatalogClient",
    "CatalogSync",
    "SyncResult",
    "fetch_installed_fonts",
    "offerable",
]
