"""Shared fixtures for pf-docs tests."""

from pathlib import Path
from typing import Callable

import pytest

from pfdocs.config import Settings
from pfdocs.models import Document, SourceType
from pfdocs.storage import IndexStore


@pytest.fixture
def store(tmp_path: Path) -> IndexStore:
    """A freshly initialized on-disk index."""
    store = IndexStore(tmp_path / "index.db")
    store.initialize()
    return store


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary data directory."""
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def make_doc() -> Callable[..., Document]:
    """Build a Document, deriving library and title from the path by default."""

    def _make(
        path: str,
        content: str,
        title: str | None = None,
        library: str | None = None,
        source_type: SourceType = SourceType.DOCS,
    ) -> Document:
        return Document(
            library=library or path.split("/", 1)[0],
            path=path,
            title=title or path.rsplit("/", 1)[-1],
            content=content,
            source_type=source_type,
        )

    return _make


@pytest.fixture
def write_file() -> Callable[[Path, str, str], Path]:
    """Write a text file below a root, creating parent directories."""

    def _write(root: Path, relative: str, text: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
