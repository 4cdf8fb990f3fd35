"""Shared fixtures for embed tests."""

import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A project with sample sources under src/ and an empty docs/ directory."""
    src = tmp_path / "src"
    src.mkdir()
    shutil.copy(FIXTURES / "sample.ts", src / "sample.ts")
    shutil.copy(FIXTURES / "sample.cs", src / "sample.cs")
    (tmp_path / "docs").mkdir()
    return tmp_path


@pytest.fixture
def sample_ts() -> bytes:
    return (FIXTURES / "sample.ts").read_bytes()


@pytest.fixture
def sample_cs() -> str:
    with (FIXTURES / "sample.cs").open(encoding="utf-8", newline="") as f:
        return f.read()
