"""CLI command implementations exposed via `fontpull.ui.cli`."""

from __future__ import annotations

from .install import install


__all__ = ["install"]
