"""
Shared test fixtures and configuration.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from scriptgen.core.config.loader import GeneratorConfig


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME/USER at a throwaway home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USER", "tester")
    monkeypatch.delenv("SCRIPTGEN_CONFIG", raising=False)
    monkeypatch.delenv("SCRIPTGEN_LOG_LEVEL", raising=False)
    return home_dir


@pytest.fixture
def config(home: Path) -> GeneratorConfig:
    """A config rooted in the temporary home."""
    return GeneratorConfig(
        home=home,
        user="tester",
        repos_dir=home / "Repos",
        scripts_dir=home / "Scripts",
        local_bin=home / ".local" / "bin",
        bashrc_path=home / ".bashrc",
    )


@pytest.fixture
def scratch_dir(tmp_path: Path, monkeypatch) -> Path:
    """Redirect tempfile so leftover scratch files can be detected."""
    d = tmp_path / "scratch"
    d.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(d))
    return d


@pytest.fixture
def no_tools():
    """Pretend neither a linter nor a clipboard tool is installed."""
    with patch("shutil.which", return_value=None):
        yield
