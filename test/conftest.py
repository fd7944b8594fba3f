from __future__ import annotations

from pathlib import Path

import pytest

from pyquarto.config.models import Settings
from pyquarto.tools.base import ToolContext
from pyquarto.tools.builtin import build_registry


@pytest.fixture
def registry():
    return build_registry(quiet=True)


@pytest.fixture
def ctx(tmp_path: Path) -> ToolContext:
    return ToolContext(cwd=str(tmp_path), settings=Settings())


@pytest.fixture
def write(tmp_path: Path):
    """Write a text file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p

    return _write
