"""Core data models for indexed documents and query results."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class SourceType(str, Enum):
    """Origin of a document; drives cleaning, preview and search scope."""

    DOCS = "docs"
    EXAMPLES = "examples"
    EPISODES = "episodes"

    @property
    def is_code(self) -> bool:
        return self is not SourceType.DOCS


# Filter value meaning "every source type"
SOURCE_ALL = "all"


def parse_source_filter(value: Optional[str]) -> Optional[SourceType]:
    """Turn a user-supplied source filter into a SourceType.

    Returns None for "all" (no filtering). Raises ValueError for unknown values.
    """
    if value is None or value == SOURCE_ALL:
        return None
    return SourceType(value)


@dataclass(frozen=True)
class DiscoveredFile:
    """A file found under a source root, with its logical path."""

    full_path: Path
    relative_path: str
    logical_path: str


@dataclass
class Document:
    """A single indexed document."""

    library: str
    path: str
    title: str
    content: str
    source_type: SourceType = SourceType.DOCS


@dataclass
class DocumentSummary:
    """A document listing entry (no body)."""

    library: str
    path: str
    title: str
    source_type: SourceType


@dataclass
class SearchResult:
    """A ranked search hit."""

    library: str
    path: str
    title: str
    snippet: str
    score: float
    source_type: SourceType


@dataclass
class IndexStats:
    """Aggregate counts computed from the live documents table."""

    total_docs: int = 0
    by_library: dict[str, int] = field(default_factory=dict)
    by_source: dict[str, int] = field(default_factory=dict)


@dataclass
class Preview:
    """Result of truncating a body to a line limit."""

    text: str
    truncated: bool
    total_lines: int
    shown_lines: int


@dataclass
class RetrievedDocument:
    """A document formatted for display."""

    document: Document
    output: str
    preview: Optional[Preview] = None
