"""Plain-text formatting shared by the CLI and the MCP server."""

from itertools import groupby

from pfdocs.config import get_library
from pfdocs.models import DocumentSummary, IndexStats, SearchResult, SourceType

_LABELS = {
    SourceType.DOCS: "[DOC]",
    SourceType.EXAMPLES: "[EXAMPLE]",
    SourceType.EPISODES: "[EPISODE]",
}


def source_label(source_type: SourceType) -> str:
    return _LABELS[source_type]


def format_search_results(results: list[SearchResult], show_source: bool = False) -> str:
    """Numbered result list with path and snippet per hit."""
    lines = []
    for i, result in enumerate(results, 1):
        label = f"{source_label(result.source_type)} " if show_source else ""
        snippet = " ".join(result.snippet.split())
        lines.append(f"{label}{i}. {result.title}")
        lines.append(f"   Path: {result.path}")
        lines.append(f"   {snippet}")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_document_list(docs: list[DocumentSummary], tree: bool = False) -> str:
    """List documents one per line, or as a per-library tree."""
    lines = []
    if not tree:
        for doc in docs:
            lines.append(doc.path)
            lines.append(f"  {doc.title}")
        return "\n".join(lines)

    for library, group in groupby(docs, key=lambda d: d.library):
        entries = list(group)
        lines.append(f"{library}/")
        for i, doc in enumerate(entries):
            prefix = "└── " if i == len(entries) - 1 else "├── "
            lines.append(f"  {prefix}{doc.path.removeprefix(f'{library}/')}")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_stats(stats: IndexStats) -> str:
    lines = [f"Total indexed documents: {stats.total_docs}", "", "By source:"]
    for source, count in stats.by_source.items():
        lines.append(f"  {source}: {count}")
    lines.append("")
    lines.append("By library:")
    for library, count in stats.by_library.items():
        lib = get_library(library)
        description = f"  ({lib.description})" if lib else ""
        lines.append(f"  {library}: {count}{description}")
    return "\n".join(lines)
