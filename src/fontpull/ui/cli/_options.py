"""Shared Typer option definitions for the install command."""

from __future__ import annotations

from typing import Annotated

import typer


INSTALL_PANEL = "Installation"
MAINTENANCE_PANEL = "Maintenance"
DIAGNOSTICS_PANEL = "Diagnostics"

InstallOption = Annotated[
    str | None,
    typer.Option(
        "--install",
        "-i",
        metavar="NAMES",
        help="Comma-separated font names to install without the interactive menu.",
        rich_help_panel=INSTALL_PANEL,
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Offer and reinstall every font, ignoring the installed record.",
        rich_help_panel=INSTALL_PANEL,
    ),
]

KeepArchivesOption = Annotated[
    bool,
    typer.Option(
        "--keep-archives",
        "-k",
        help="Keep downloaded archives after installation.",
        rich_help_panel=INSTALL_PANEL,
    ),
]

ActivateOption = Annotated[
    bool,
    typer.Option(
        "--activate",
        help="Pick an installed font file and apply it as the Termux terminal font.",
        rich_help_panel=INSTALL_PANEL,
    ),
]

RepositoryOption = Annotated[
    str,
    typer.Option(
        "--repository",
        metavar="OWNER/NAME",
        help="GitHub repository publishing the font release archives.",
        rich_help_panel=INSTALL_PANEL,
    ),
]

ListInstalledOption = Annotated[
    bool,
    typer.Option(
        "--list-installed",
        "-l",
        help="List installed fonts and exit.",
        rich_help_panel=MAINTENANCE_PANEL,
    ),
]

ListAvailableOption = Annotated[
    bool,
    typer.Option(
        "--list-available",
        "-L",
        help="List every font of the latest release and exit.",
        rich_help_panel=MAINTENANCE_PANEL,
    ),
]

UninstallOption = Annotated[
    str | None,
    typer.Option(
        "--uninstall",
        "-U",
        metavar="NAMES",
        help="Comma-separated installed font names to remove.",
        rich_help_panel=MAINTENANCE_PANEL,
    ),
]

UpdateOption = Annotated[
    bool,
    typer.Option(
        "--update",
        "-u",
        help="Reinstall installed fonts when a new release is available.",
        rich_help_panel=MAINTENANCE_PANEL,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        help="Show the fontpull version and exit.",
        is_eager=True,
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

