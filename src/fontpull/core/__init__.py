"""Configuration, directories, transport and errors shared by every layer."""

from __future__ import annotations

from .config import InstallerConfig
from .exceptions import (
    CatalogFetchError,
    DependencyMissingError,
    DownloadError,
    ExtractError,
    FontInstallError,
    FontpullError,
    InvalidSelectionError,
    NoSelectionError,
    SelectionQuit,
    UnknownFontError,
)
from .user_dir import FontpullUserDir, get_user_dir, user_dir_context


__all__ = [
    "CatalogFetchError",
    "DependencyMissingError",
    "DownloadError",
    "ExtractError",
    "FontInstallError",
    "FontpullError",
    "FontpullUserDir",
    "InstallerConfig",
    "InvalidSelectionError",
    "NoSelectionError",
    "SelectionQuit",
    "UnknownFontError",
    "get_user_dir",
    "user_dir_context",
]
