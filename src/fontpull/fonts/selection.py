"""Parsing of menu and direct font selections."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import PurePath

from fontpull.core.exceptions import (
    InvalidSelectionError,
    NoSelectionError,
    SelectionQuit,
    UnknownFontError,
)


QUIT_TOKEN = "q"


@dataclass(frozen=True, slots=True)
class Selection:
    """Fonts chosen for one run, in catalog order and without duplicates."""

    fonts: tuple[str, ...] = ()

    @classmethod
    def of(cls, names: Iterable[str]) -> Selection:
        return cls(tuple(dict.fromkeys(names)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.fonts)

    def __len__(self) -> int:
        return len(self.fonts)

    def __contains__(self, name: object) -> bool:
        return name in self.fonts

    def __bool__(self) -> bool:
        return bool(self.fonts)

    def without(self, names: Iterable[str]) -> Selection:
        excluded = set(names)
        return Selection(tuple(font for font in self.fonts if font not in excluded))


def _ordinal(token: str, bound: str, limit: int) -> int:
    if not (bound.isascii() and bound.isdigit()):
        raise InvalidSelectionError(token, "expected a number or a range like 2-5")
    value = int(bound)
    if not 1 <= value <= limit:
        raise InvalidSelectionError(token, f"choose numbers between 1 and {limit}")
    return value


def _expand_token(token: str, limit: int) -> range:
    if "-" not in token:
        value = _ordinal(token, token, limit)
        return range(value, value + 1)
    start_text, _, end_text = token.partition("-")
    start_text, end_text = start_text.strip(), end_text.strip()
    if not start_text or not end_text:
        raise InvalidSelectionError(token, "ranges need both bounds")
    start = _ordinal(token, start_text, limit)
    end = _ordinal(token, end_text, limit)
    if start > end:
        raise InvalidSelectionError(token, "range start is greater than its end")
    return range(start, end + 1)


def parse_menu_selection(text: str, options: Sequence[str]) -> Selection:
    """Turn ``"1,3-5"`` style input into the matching subset of ``options``.

    Ordinals are 1-based positions into ``options``. Any invalid token rejects
    the whole line with ``InvalidSelectionError``. A bare ``q`` token raises
    ``SelectionQuit`` and a blank line raises ``NoSelectionError``.
    """
    if not text.strip():
        raise NoSelectionError("No fonts selected.")
    tokens = [token.strip() for token in text.split(",")]
    if QUIT_TOKEN in tokens:
        raise SelectionQuit()

    chosen: set[int] = set()
    for token in tokens:
        if not token:
            raise InvalidSelectionError(token, "empty entry")
        chosen.update(_expand_token(token, len(options)))
    return Selection(tuple(options[index - 1] for index in sorted(chosen)))


def prompt_selection(
    options: Sequence[str],
    ask: Callable[[], str],
    *,
    on_invalid: Callable[[InvalidSelectionError], None] | None = None,
) -> Selection:
    """Ask until a submission parses, reporting rejected lines via ``on_invalid``."""
    while True:
        try:
            return parse_menu_selection(ask(), options)
        except InvalidSelectionError as exc:
            if on_invalid is not None:
                on_invalid(exc)


def parse_direct_selection(text: str) -> tuple[str, ...]:
    """Split a comma-separated list of literal font names."""
    names = (name.strip() for name in text.split(","))
    return tuple(dict.fromkeys(name for name in names if name))


def is_plain_name(name: str) -> bool:
    """Return whether ``name`` is a single path component usable as a font directory."""
    return name not in {"", ".", ".."} and PurePath(name).name == name and "\\" not in name


def validate_direct_selection(
    names: Sequence[str],
    release: str,
    exists: Callable[[str, str], bool],
) -> Selection:
    """Probe every name before anything is downloaded.

    A single unknown name rejects the whole list with ``UnknownFontError``.
    """
    if not names:
        raise NoSelectionError("No font names were given.")
    unknown = [name for name in names if not is_plain_name(name) or not exists(name, release)]
    if unknown:
        raise UnknownFontError(unknown, release)
    return Selection.of(names)


__all__ = [
    "QUIT_TOKEN",
    "Selection",
    "is_plain_name",
    "parse_direct_selection",
    "parse_menu_selection",
    "prompt_selection",
    "validate_direct_selection",
]
