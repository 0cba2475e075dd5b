"""Primary public API for fontpull."""

from __future__ import annotations

from fontpull.api import InstallerService, InstallOutcome
from fontpull.core import (
    FontpullError,
    InstallerConfig,
    user_dir_context,
)
from fontpull.fonts import (
    CatalogClient,
    InstallReport,
    Selection,
    offerable,
    parse_menu_selection,
)
from fontpull.version import get_version


__version__ = get_version()

__all__ = [
    "CatalogClient",
    "FontpullError",
    "InstallOutcome",
    "InstallReport",
    "InstallerConfig",
    "InstallerService",
    "Selection",
    "__version__",
    "get_version",
    "offerable",
    "parse_menu_selection",
    "user_dir_context",
]
