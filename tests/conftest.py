from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from helpers import FakeCatalogClient
import pytest

from fontpull.core.config import InstallerConfig
from fontpull.core.user_dir import FontpullUserDir, user_dir_context


@pytest.fixture
def user_dir(tmp_path: Path) -> Iterator[FontpullUserDir]:
    with user_dir_context(
        root=tmp_path / "home",
        cache_root=tmp_path / "cache",
        fonts_root=tmp_path / "fonts",
    ) as current:
        yield current


@pytest.fixture
def config(user_dir: FontpullUserDir) -> InstallerConfig:
    return InstallerConfig.from_environment()


@pytest.fixture
def client() -> FakeCatalogClient:
    return FakeCatalogClient()
