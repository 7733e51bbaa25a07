"""Data models for pf-docs."""

from pfdocs.models.document import (
    SOURCE_ALL,
    DiscoveredFile,
    Document,
    DocumentSummary,
    IndexStats,
    Preview,
    RetrievedDocument,
    SearchResult,
    SourceType,
    parse_source_filter,
)

__all__ = [
    "SOURCE_ALL",
    "DiscoveredFile",
    "Document",
    "DocumentSummary",
    "IndexStats",
    "Preview",
    "RetrievedDocument",
    "SearchResult",
    "SourceType",
    "parse_source_filter",
]
