"""Session configuration shared by every installer component.

InstallerConfig

`repository` (`str`)
: GitHub ``owner/name`` slug publishing the font release archives.

`fonts_path` (`str`)
: Directory of the repository source tree listing one entry per font package.

`ref` (`str`)
: Git reference used when listing ``fonts_path``.

`install_dir` (`Path`)
: Destination root. Each font is extracted into its own subdirectory.

`download_dir` (`Path`)
: Staging directory holding the transient ``.zip`` archives.

`data_dir` (`Path`)
: Location of the release identifier and installed-fonts records.

`force` (`bool`)
: Offer and reinstall every font regardless of the installed record.

`keep_archives` (`bool`)
: Leave downloaded archives in `download_dir` after the run.

`timeout` (`float`)
: Seconds allowed for each network call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from fontpull.core.user_dir import get_user_dir


__all__ = [
    "DEFAULT_FONTS_PATH",
    "DEFAULT_REF",
    "DEFAULT_REPOSITORY",
    "DEFAULT_TIMEOUT",
    "INSTALLED_FILENAME",
    "InstallerConfig",
    "RELEASE_FILENAME",
]

DEFAULT_REPOSITORY = "ryanoasis/nerd-fonts"
DEFAULT_FONTS_PATH = "patched-fonts"
DEFAULT_REF = "master"
DEFAULT_TIMEOUT = 30.0
RELEASE_FILENAME = "release.txt"
INSTALLED_FILENAME = "installed.txt"


@dataclass(frozen=True, slots=True)
class InstallerConfig:
    """Immutable per-invocation settings."""

    install_dir: Path
    download_dir: Path
    data_dir: Path
    repository: str = DEFAULT_REPOSITORY
    fonts_path: str = DEFAULT_FONTS_PATH
    ref: str = DEFAULT_REF
    force: bool = False
    keep_archives: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_environment(cls, **overrides: Any) -> InstallerConfig:
        """Resolve directories from the user dir singleton and apply overrides."""
        user_dir = get_user_dir()
        values: dict[str, Any] = {
            "install_dir": user_dir.fonts_root,
            "download_dir": user_dir.cache_dir("downloads", create=False),
            "data_dir": user_dir.root,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    @property
    def release_file(self) -> Path:
        return self.data_dir / RELEASE_FILENAME

    @property
    def installed_file(self) -> Path:
        return self.data_dir / INSTALLED_FILENAME

    def archive_path(self, font: str) -> Path:
        """Return the staging path for a font archive."""
        return self.download_dir / f"{font}.zip"

    def font_dir(self, font: str) -> Path:
        """Return the extraction directory for a font."""
        return self.install_dir / font

    def with_flags(self, *, force: bool | None = None, keep_archives: bool | None = None) -> InstallerConfig:
        """Return a copy with updated session flags."""
        changes: dict[str, bool] = {}
        if force is not None:
            changes["force"] = force
        if keep_archives is not None:
            changes["keep_archives"] = keep_archives
        return replace(self, **changes)
