"""Shared pytest fixtures for yamlmenu tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from yamlmenu.domain.sample import SAMPLE_YAML


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[..., Path]:
    """Write YAML text to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "config.yml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_file(write_yaml: Callable[..., Path]) -> Path:
    """The bundled sample document written to disk."""
    return write_yaml(SAMPLE_YAML)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` so walk-up
    discovery never finds a yamlmenu.toml outside the test.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("YAMLMENU_CONFIG", raising=False)
