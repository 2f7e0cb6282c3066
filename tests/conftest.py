"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from dapsd.core.context import reset_directory_service
from dapsd.core.services.directory import DirectoryService


@pytest.fixture(autouse=True)
def _fresh_process_registry():
    """Every test starts with an empty process-wide registry."""
    reset_directory_service()
    yield
    reset_directory_service()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """A small documentation tree with a sibling secret next to it."""
    root = tmp_path / "daps"
    (root / "guide").mkdir(parents=True)
    (root / "index.html").write_text("<h1>daps</h1>")
    (root / "guide" / "intro.md").write_text("# Intro\n")
    (root / "guide" / "index.html").write_text("<h1>guide</h1>")
    (tmp_path / "secret.txt").write_text("top secret")
    return root


@pytest.fixture
def service(docs_dir: Path) -> DirectoryService:
    """A DirectoryService with rust/daps registered at docs_dir."""
    svc = DirectoryService()
    svc.register_project("rust", "daps", docs_dir)
    return svc
