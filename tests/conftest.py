from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch) -> Path:
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home_dir / ".config"))
    monkeypatch.delenv("MAGE_JOBS", raising=False)
    monkeypatch.delenv("MAGE_VERBOSE", raising=False)
    return home_dir


@pytest.fixture
def dotfiles(tmp_path) -> Path:
    """A dotfiles directory with one entry whose target lives under tmp_path."""
    root = tmp_path / "dotfiles"
    root.mkdir()
    (root / "example.config").write_text("key = value\n", encoding="utf-8")
    target = tmp_path / "target" / "example.config"
    (root / "magefile.toml").write_text(
        f'["example.config"]\ntarget_path = "{target}"\n', encoding="utf-8"
    )
    return root
