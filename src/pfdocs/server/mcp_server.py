"""FastMCP server implementation for pf-docs."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from pfdocs.config import Settings
from pfdocs.formatting import format_document_list, format_search_results, format_stats
from pfdocs.models import SOURCE_ALL, SourceType, parse_source_filter
from pfdocs.retrieval import retrieve
from pfdocs.storage import IndexStore


def create_mcp_server(settings: Settings) -> FastMCP:
    """Create an MCP server over the local index.

    Design: 1 process = 1 index file. Every tool call opens and closes
    its own connection.

    Args:
        settings: Settings naming the index file and defaults

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="pf-docs",
    )

    store = IndexStore(settings.index_path)

    @mcp.tool()
    def search(
        query: str,
        library: Optional[str] = None,
        source: str = SourceType.DOCS.value,
        limit: int = 10,
    ) -> str:
        """Full-text search across indexed Point-Free documentation.

        Args:
            query: Words to search for; each term is prefix-matched
            library: Optional library short name (e.g. "tca", "sharing")
            source: One of "docs", "examples", "episodes" or "all" (default: docs)
            limit: Maximum number of results to return (default: 10)

        Returns:
            Ranked results with paths usable with the get tool
        """
        try:
            source_type = parse_source_filter(source)
        except ValueError:
            return f"Error: Invalid source: {source}"

        results = store.search(query, library=library, source_type=source_type, limit=limit)
        if not results:
            return f"No results found for: {query}"
        return format_search_results(results, show_source=source == SOURCE_ALL)

    @mcp.tool()
    def get(path: str, raw: bool = False, lines: Optional[int] = None) -> str:
        """Read a document by path.

        Code files are previewed to the first lines unless raw is set.

        Args:
            path: Document path as shown by search or ls (e.g. "tca/Articles/Testing")
            raw: Return the full content without a header
            lines: Limit output to this many lines

        Returns:
            The formatted document
        """
        result = retrieve(
            store, path, raw=raw, lines=lines, default_lines=settings.preview_lines
        )
        if result is None:
            return f"Error: Document not found: {path}"
        return result.output

    @mcp.tool()
    def ls(library: Optional[str] = None, source: str = SOURCE_ALL) -> str:
        """List indexed documents.

        Args:
            library: Optional library short name to filter by
            source: One of "docs", "examples", "episodes" or "all" (default: all)

        Returns:
            Document paths with titles
        """
        try:
            source_type = parse_source_filter(source)
        except ValueError:
            return f"Error: Invalid source: {source}"

        docs = store.list_documents(library, source_type)
        if not docs:
            return "No documents found"
        return format_document_list(docs)

    @mcp.tool()
    def stats() -> str:
        """Show document counts per library and source type."""
        return format_stats(store.stats())

    return mcp
