"""Exception hierarchy for the font installer."""

from __future__ import annotations

from collections.abc import Iterable


__all__ = [
    "CatalogFetchError",
    "DependencyMissingError",
    "DownloadError",
    "ExtractError",
    "FontInstallError",
    "FontpullError",
    "InvalidSelectionError",
    "NoSelectionError",
    "SelectionQuit",
    "UnknownFontError",
]


class FontpullError(RuntimeError):
    """Base exception for fatal installer failures."""


class DependencyMissingError(FontpullError):
    """Raised when required host tools are not available on PATH."""

    def __init__(self, tools: Iterable[str]) -> None:
        self.tools = tuple(tools)
        super().__init__(f"Missing required dependencies: {', '.join(self.tools)}")


class CatalogFetchError(FontpullError):
    """Raised when the remote release or font listing cannot be retrieved."""


class InvalidSelectionError(FontpullError):
    """Raised when a menu submission contains an unusable token."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid selection '{token}': {reason}")


class NoSelectionError(FontpullError):
    """Raised when a run ends up with nothing to install."""


class UnknownFontError(FontpullError):
    """Raised when direct-install names do not exist in the release."""

    def __init__(self, names: Iterable[str], release: str) -> None:
        self.names = tuple(names)
        self.release = release
        super().__init__(
            f"Font(s) not available in release {release}: {', '.join(self.names)}"
        )


class FontInstallError(FontpullError):
    """Base class for per-font pipeline failures."""

    def __init__(self, font: str, message: str) -> None:
        self.font = font
        super().__init__(message)


class DownloadError(FontInstallError):
    """Raised when an archive cannot be downloaded."""


class ExtractError(FontInstallError):
    """Raised when a downloaded archive cannot be unpacked."""


class SelectionQuit(Exception):
    """Raised when the user asks to leave the selection menu."""
