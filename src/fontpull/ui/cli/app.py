"""Typer application wiring for the fontpull CLI."""

from __future__ import annotations

from rich.traceback import Traceback
import typer

from fontpull.ui.cli.commands.install import install

from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Install patched terminal fonts from the latest release.",
    context_settings={"help_option_names": ["--help", "-h"]},
    add_completion=False,
)


app.command()(install)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
