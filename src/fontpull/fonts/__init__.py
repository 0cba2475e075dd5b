"""Font catalog synchronisation, selection and installation.

Architecture
: `CatalogClient` talks to the release feed: latest release tag, the list of
  font packages, archive existence probes and downloads.
: `ReleaseCache` and `InstalledFonts` are the only durable state. `CatalogSync`
  reconciles them with the remote release; `offerable` computes which fonts
  the menu shows.
: `parse_menu_selection`/`validate_direct_selection` produce an immutable
  `Selection` that `InstallPipeline` consumes font by font, followed by
  `cleanup_archives`.
: `fontpull.fonts.activation` holds the host glue (fontconfig refresh,
  Termux font activation).
"""

from fontpull.fonts.catalog import (
    CatalogClient,
    CatalogSync,
    SyncResult,
    fetch_installed_fonts,
    offerable,
)
from fontpull.fonts.logging import FontPipelineLogger
from fontpull.fonts.pipeline import InstallPipeline, InstallReport, cleanup_archives
from fontpull.fonts.records import (
    FileInstalledStore,
    InstalledFonts,
    InstalledStore,
    MemoryInstalledStore,
)
from fontpull.fonts.release import ReleaseCache, is_stale
from fontpull.fonts.selection import (
    Selection,
    parse_direct_selection,
    parse_menu_selection,
    validate_direct_selection,
)


__all__ = [
    "CatalogClient",
    "CatalogSync",
    "FileInstalledStore",
    "FontPipelineLogger",
    "InstallPipeline",
    "InstallReport",
    "InstalledFonts",
    "InstalledStore",
    "MemoryInstalledStore",
    "ReleaseCache",
    "Selection",
    "SyncResult",
    "cleanup_archives",
    "fetch_installed_fonts",
    "is_stale",
    "offerable",
    "parse_direct_selection",
    "parse_menu_selection",
    "validate_direct_selection",
]
