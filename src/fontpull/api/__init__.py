"""Programmatic entry points for embedding the installer."""

from __future__ import annotations

from .service import DirectPlan, InstallerService, InstallOutcome, MenuPlan, UninstallResult


__all__ = [
    "DirectPlan",
    "InstallOutcome",
    "InstallerService",
    "MenuPlan",
    "UninstallResult",
]
