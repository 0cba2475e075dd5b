"""Small logging helpers that integrate with the fontpull CLI."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
import typer


def _resolve_state() -> object | None:
    from fontpull.ui.cli.state import get_cli_state

    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


@dataclass(slots=True)
class FontPipelineLogger:
    """Route pipeline messages to the active CLI console, or plain echo."""

    verbose: bool = False
    _state: object | None = None

    def __post_init__(self) -> None:
        self._state = _resolve_state()
        if self._state is not None and getattr(self._state, "verbosity", 0) > 0:
            self.verbose = True

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *(str(arg) for arg in args)])
        return message

    def _console(self) -> Console | None:
        if self._state is None:
            return None
        return self._state.console

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        console = self._console()
        if console is not None:
            console.print(message, markup=False, highlight=False)
            return
        typer.echo(message)

    def success(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            from fontpull.ui.cli.state import emit_success

            emit_success(message)
            return
        typer.secho(message, fg="green")

    def warning(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            from fontpull.ui.cli.state import emit_warning

            emit_warning(message)
            return
        typer.secho(message, fg="yellow", err=True)

    def error(self, message: str, *args: Any, exception: BaseException | None = None) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            from fontpull.ui.cli.state import emit_error

            emit_error(message, exception=exception)
            return
        typer.secho(message, fg="red", err=True)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a verbose message when verbose mode is enabled."""
        if not self.verbose:
            return
        self.info(message, *args)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[..., None]]:
        """Yield a byte counter rendered with a Rich progress bar."""
        console = self._console() or Console(stderr=True)
        with Progress(
            SpinnerColumn(),
            TextColumn(f"[bold cyan]{escape(task)}"),
            BarColumn(),
            DownloadColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=not self.verbose,
        ) as progress:
            task_id: TaskID = progress.add_task(task, total=total)

            def _advance(step: int = 1) -> None:
                progress.update(task_id, advance=step)

            yield _advance


__all__ = ["FontPipelineLogger"]
