"""Rich presenters for font menus, listings and install summaries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from rich import box
from rich.columns import Columns
from rich.table import Table
from rich.text import Text

from fontpull.fonts.pipeline import InstallReport

from .state import CLIState


def _format_path(path: Path) -> str:
    """Format a path relative to the home directory when possible."""
    resolved = path.expanduser().resolve()
    try:
        return f"~/{resolved.relative_to(Path.home())}"
    except ValueError:
        return str(resolved)


def present_menu(
    state: CLIState,
    fonts: Sequence[str],
    *,
    release: str,
    repository: str,
) -> None:
    """Print the numbered font menu."""
    entries = [
        Text.assemble((f"{index:>3}", "bold cyan"), " ", name)
        for index, name in enumerate(fonts, start=1)
    ]
    state.console.print(f"[bold]{repository} {release}[/]: {len(fonts)} font(s) available")
    state.console.print(Columns(entries, equal=True, column_first=True, padding=(0, 3)))


def present_installed(state: CLIState, fonts: Iterable[str]) -> None:
    names = sorted(fonts, key=str.lower)
    if not names:
        state.console.print("No fonts installed yet.")
        return
    table = Table(title="Installed Fonts", box=box.SQUARE, header_style="bold cyan")
    table.add_column("Font", style="magenta")
    for name in names:
        table.add_row(name)
    state.console.print(table)


def present_available(
    state: CLIState,
    fonts: Sequence[str],
    installed: Iterable[str],
    *,
    release: str,
) -> None:
    installed_set = set(installed)
    table = Table(
        title=f"Available Fonts ({release})",
        box=box.SQUARE,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Font", style="magenta")
    table.add_column("Installed", justify="center")
    for index, name in enumerate(fonts, start=1):
        marker = Text("yes", style="green") if name in installed_set else Text("-")
        table.add_row(str(index), name, marker)
    state.console.print(table)


def present_report(
    state: CLIState,
    report: InstallReport,
    *,
    install_dir: Path,
    kept_archives: Path | None = None,
) -> None:
    """Summarise an install run."""
    if report.installed:
        state.console.print(
            f"[green]Installed {len(report.installed)} font(s) into "
            f"{_format_path(install_dir)}[/]"
        )
    if report.failed:
        table = Table(title="Failed Fonts", box=box.SQUARE, header_style="bold red")
        table.add_column("Font", style="magenta")
        table.add_column("Reason")
        for name, reason in report.failed.items():
            table.add_row(name, reason)
        state.err_console.print(table)
    if kept_archives is not None:
        state.console.print(f"Archives kept in {_format_path(kept_archives)}")


__all__ = ["present_available", "present_installed", "present_menu", "present_report"]
