"""Implementation of the `fontpull` install command."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import subprocess

import click
import typer

from fontpull.api.service import InstallerService, InstallOutcome
from fontpull.core.config import DEFAULT_REPOSITORY, InstallerConfig
from fontpull.core.exceptions import (
    FontpullError,
    InvalidSelectionError,
    NoSelectionError,
    SelectionQuit,
)
from fontpull.fonts.activation import (
    FontBrowser,
    TermuxFontHook,
    check_dependencies,
    refresh_font_cache,
)
from fontpull.fonts.logging import FontPipelineLogger
from fontpull.fonts.selection import QUIT_TOKEN
from fontpull.version import get_version

from .._options import (
    ActivateOption,
    DebugOption,
    ForceOption,
    InstallOption,
    KeepArchivesOption,
    ListAvailableOption,
    ListInstalledOption,
    RepositoryOption,
    UninstallOption,
    UpdateOption,
    VerbosityOption,
    VersionOption,
)
from ..presenter import present_available, present_installed, present_menu, present_report
from ..state import (
    CLIState,
    configure_logging,
    emit_error,
    emit_success,
    emit_warning,
    set_cli_state,
)


MENU_PROMPT = f"Select fonts (e.g. 1,3-5) or '{QUIT_TOKEN}' to quit"


def build_service(config: InstallerConfig) -> InstallerService:
    """Create the service used by the command; replaced in tests."""
    return InstallerService(config, logger=FontPipelineLogger())


def _ask() -> str:
    return typer.prompt(MENU_PROMPT, default="", show_default=False)


def _report_invalid(exc: InvalidSelectionError) -> None:
    emit_error(f"{exc}. Please try again.")


def _choose_font_file(state: CLIState, directory: Path, entries: Sequence[Path]) -> int | None:
    state.console.print(f"[bold]{directory}[/]")
    for index, entry in enumerate(entries, start=1):
        suffix = "/" if entry.is_dir() else ""
        state.console.print(f"  [cyan]{index:>3}[/] {entry.name}{suffix}")
    answer = typer.prompt("Pick an entry (blank to go back)", default="", show_default=False)
    if not answer.strip().isdigit():
        return None
    return int(answer) - 1


def _activate(state: CLIState, root: Path) -> None:
    if not root.is_dir():
        raise NoSelectionError(f"No installed fonts found in {root}.")
    browser = FontBrowser(root)
    chosen = browser.browse(lambda directory, entries: _choose_font_file(state, directory, entries))
    if chosen is None:
        emit_warning("No font file selected; terminal font unchanged.")
        return
    try:
        target = TermuxFontHook().activate(chosen)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise FontpullError(f"Unable to apply {chosen.name}: {exc}") from exc
    emit_success(f"{chosen.name} applied as terminal font ({target})")


def _finish(state: CLIState, config: InstallerConfig, outcome: InstallOutcome) -> None:
    present_report(
        state,
        outcome.report,
        install_dir=config.install_dir,
        kept_archives=outcome.kept_archives,
    )
    if outcome.report.installed and not refresh_font_cache(config.install_dir):
        emit_warning("Unable to refresh the font cache; run 'fc-cache -f' manually.")


def _run(
    state: CLIState,
    config: InstallerConfig,
    *,
    names: str | None,
    list_installed: bool,
    list_available: bool,
    uninstall: str | None,
    update: bool,
    activate: bool,
) -> None:
    service = build_service(config)

    if list_installed:
        present_installed(state, service.installed)
        return

    if uninstall is not None:
        result = service.uninstall(uninstall)
        for name in result.removed:
            emit_success(f"{name} removed")
        for name in result.unknown:
            emit_warning(f"{name} is not installed")
        if result.removed:
            refresh_font_cache(config.install_dir)
        return

    if list_available:
        release = service.client.fetch_latest_release()
        present_available(state, service.client.fetch_all_fonts(), service.installed, release=release)
        return

    check_dependencies()

    if update:
        outcome = service.update()
        if outcome is None:
            emit_success("All installed fonts are up to date.")
        elif not outcome.selection:
            emit_success("Release record updated; no fonts were installed before.")
        else:
            _finish(state, config, outcome)
        if activate:
            _activate(state, config.install_dir)
        return

    if names is not None:
        plan = service.plan_direct(names)
        for name in plan.skipped:
            emit_warning(f"{name} is already installed; use --force to reinstall")
        if not plan.selection:
            emit_success("Nothing to install.")
        else:
            _finish(state, config, service.install(plan.selection, plan.sync.release))
        if activate:
            _activate(state, config.install_dir)
        return

    if activate:
        _activate(state, config.install_dir)
        return

    menu = service.plan_menu()
    if not menu.options:
        emit_success("All fonts are already installed. Use --force to reinstall.")
        return
    present_menu(state, menu.options, release=menu.sync.release, repository=config.repository)
    selection = service.choose(menu, _ask, on_invalid=_report_invalid)
    _finish(state, config, service.install(selection, menu.sync.release))


def install(
    names: InstallOption = None,
    force: ForceOption = False,
    keep_archives: KeepArchivesOption = False,
    activate: ActivateOption = False,
    repository: RepositoryOption = DEFAULT_REPOSITORY,
    list_installed: ListInstalledOption = False,
    list_available: ListAvailableOption = False,
    uninstall: UninstallOption = None,
    update: UpdateOption = False,
    verbose: VerbosityOption = 0,
    debug: DebugOption = False,
    version: VersionOption = False,
) -> None:
    """Download and install fonts from the latest release.

    Without --install an interactive menu lists the fonts that are not
    installed yet.
    """

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)
    configure_logging(state.verbosity)

    if version:
        typer.echo(get_version())
        raise typer.Exit()

    config = InstallerConfig.from_environment(
        repository=repository,
        force=force,
        keep_archives=keep_archives,
    )

    try:
        _run(
            state,
            config,
            names=names,
            list_installed=list_installed,
            list_available=list_available,
            uninstall=uninstall,
            update=update,
            activate=activate,
        )
    except SelectionQuit as exc:
        typer.echo("Goodbye.")
        raise typer.Exit(code=0) from exc
    except FontpullError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["build_service", "install"]
