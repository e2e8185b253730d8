"""Pytest fixtures for promptline tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="promptline-tests-"))
os.environ["PROMPTLINE_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ["PROMPTLINE_DATA_DIR"] = str(_TEST_BASE_DIR / "data")

if TYPE_CHECKING:
    from collections.abc import Generator


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def config_dir(monkeypatch, tmp_path: Path) -> Path:
    """Point promptline at an empty per-test config directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("PROMPTLINE_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def fake_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """A directory tree with a hand-written .git/HEAD, no git binary needed."""
    repo = tmp_path / "repo"
    git_dir = repo / ".git"
    git_dir.mkdir(parents=True)
    (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (repo / "src" / "pkg").mkdir(parents=True)
    yield repo
