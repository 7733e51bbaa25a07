"""CLI entry point for pf-docs."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Literal, Optional, cast

from pfdocs import __version__
from pfdocs.config import (
    EPISODES,
    EXAMPLES,
    LIBRARIES,
    LibraryConfig,
    Settings,
    SourceConfig,
    episodes_source,
    examples_source,
    get_library,
    get_library_names,
    get_settings,
    library_source,
)
from pfdocs.exceptions import RepositoryError, StoreError
from pfdocs.formatting import format_document_list, format_search_results, format_stats
from pfdocs.indexer import index_source
from pfdocs.models import SOURCE_ALL, SourceType, parse_source_filter
from pfdocs.protocols import RepositoryProvider
from pfdocs.repos import GitRepositoryProvider
from pfdocs.retrieval import retrieve
from pfdocs.storage import IndexStore

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

SOURCE_CHOICES = [s.value for s in SourceType] + [SOURCE_ALL]


def _select_libraries(names: Optional[list[str]]) -> list[LibraryConfig]:
    selected = []
    for name in names or []:
        lib = get_library(name)
        if lib is None:
            logger.warning(f"  Unknown library: {name}")
            logger.warning(f"    Available: {', '.join(get_library_names())}")
        else:
            selected.append(lib)
    return selected


def _sources(
    settings: Settings,
    libraries: list[LibraryConfig],
    examples: bool,
    episodes: bool,
) -> list[tuple[str, SourceConfig]]:
    sources = [(lib.short_name, library_source(lib, settings.repos_dir)) for lib in libraries]
    if examples:
        sources.append((EXAMPLES.source_id, examples_source(settings.repos_dir)))
    if episodes:
        sources.append((EPISODES.source_id, episodes_source(settings.repos_dir)))
    return sources


def _index_all(store: IndexStore, sources: list[tuple[str, SourceConfig]], verb: str) -> int:
    total = 0
    for source_id, source in sources:
        count = index_source(store, source)
        logger.info(f"  {verb} {source_id}: {count} documents")
        total += count
    return total


def init(
    settings: Settings,
    libs: Optional[list[str]] = None,
    all_libs: bool = False,
    examples: bool = False,
    episodes: bool = False,
    provider: Optional[RepositoryProvider] = None,
) -> None:
    """Clone and index documentation, examples and episodes.

    Args:
        settings: Paths and defaults
        libs: Library short names to initialize
        all_libs: Initialize every library
        examples: Include the example apps
        episodes: Include episode code samples
        provider: Repository provider (defaults to git)
    """
    provider = provider or GitRepositoryProvider(settings.repos_dir)

    if all_libs or (not libs and not examples and not episodes):
        libraries = list(LIBRARIES)
    else:
        libraries = _select_libraries(libs)

    sources = _sources(settings, libraries, examples, episodes)
    if not sources:
        logger.error("No valid libraries or sources specified.")
        logger.error(f"Available libraries: {', '.join(get_library_names())}")
        sys.exit(1)

    logger.info("Cloning repositories...")
    acquired = []
    for source_id, source in sources:
        try:
            provider.acquire(source_id)
        except RepositoryError as e:
            logger.error(f"  Failed to clone {source_id}: {e}")
            continue
        acquired.append((source_id, source))

    logger.info("")
    logger.info("Building search index...")
    store = IndexStore(settings.index_path)
    total = _index_all(store, acquired, "Indexed")

    logger.info("")
    logger.info(f"Done! Indexed {total} items -> {settings.index_path}")


def update(
    settings: Settings,
    libs: Optional[list[str]] = None,
    examples: bool = False,
    episodes: bool = False,
    provider: Optional[RepositoryProvider] = None,
) -> None:
    """Pull cloned sources and re-index the ones that changed."""
    provider = provider or GitRepositoryProvider(settings.repos_dir)

    if libs:
        libraries = []
        for lib in _select_libraries(libs):
            if provider.is_acquired(lib.short_name):
                libraries.append(lib)
            else:
                logger.warning(
                    f"  Library not initialized: {lib.short_name}. "
                    f"Run 'pf-docs init --libs {lib.short_name}' first."
                )
    else:
        libraries = [lib for lib in LIBRARIES if provider.is_acquired(lib.short_name)]

    if examples and not provider.is_acquired(EXAMPLES.source_id):
        logger.warning("  Examples not initialized. Run 'pf-docs init --examples' first.")
        examples = False
    if episodes and not provider.is_acquired(EPISODES.source_id):
        logger.warning("  Episodes not initialized. Run 'pf-docs init --episodes' first.")
        episodes = False

    sources = _sources(settings, libraries, examples, episodes)
    if not sources:
        logger.warning("Nothing to update. Run 'pf-docs init' first.")
        return

    logger.info("Pulling latest changes...")
    changed = []
    for source_id, source in sources:
        try:
            if provider.refresh(source_id):
                changed.append((source_id, source))
        except RepositoryError as e:
            logger.error(f"  Failed to update {source_id}: {e}")

    if changed:
        logger.info("")
        logger.info("Re-indexing updated sources...")
        _index_all(IndexStore(settings.index_path), changed, "Re-indexed")

    logger.info("")
    logger.info("Update complete!")


def _parse_source(value: Optional[str], default: Optional[SourceType]) -> Optional[SourceType]:
    if value is None:
        return default
    try:
        return parse_source_filter(value)
    except ValueError:
        logger.error(f"Invalid source: {value}")
        logger.error(f"Valid sources: {', '.join(SOURCE_CHOICES)}")
        sys.exit(1)


def search(
    settings: Settings,
    query: str,
    lib: Optional[str] = None,
    limit: Optional[int] = None,
    source: Optional[str] = None,
    as_json: bool = False,
) -> None:
    """Search the index. Without a source, only documentation is searched."""
    source_type = _parse_source(source, SourceType.DOCS)
    source_name = source_type.value if source_type else SOURCE_ALL
    limit = limit if limit is not None else settings.search_limit

    store = IndexStore(settings.index_path)
    results = store.search(query, library=lib, source_type=source_type, limit=limit)

    if as_json:
        print(
            json.dumps(
                {"query": query, "source": source_name, "results": [asdict(r) for r in results]},
                indent=2,
            )
        )
        return

    if not results:
        print(f'No results found for: "{query}"')
        if lib:
            print(f"  (searched in library: {lib})")
        if source_type is not None:
            print(f"  (searched in source: {source_name})")
            print("  Try --source all to search everything")
        return

    label = "all sources" if source_type is None else source_name
    print(f'Search results for: "{query}" ({label})')
    print("")
    print(format_search_results(results, show_source=source_type is None))
    print("")
    print("To view a document: pf-docs get <path>")
    print(f"Example: pf-docs get {results[0].path}")


def get(
    settings: Settings,
    path: str,
    as_json: bool = False,
    raw: bool = False,
    preview: bool = False,
    lines: Optional[int] = None,
) -> None:
    """Print a document. Code files are previewed unless --raw is given."""
    store = IndexStore(settings.index_path)

    if as_json:
        doc = store.get_document(path)
        if doc is None:
            print(json.dumps({"error": "Document not found", "path": path}, indent=2))
            sys.exit(1)
        print(json.dumps(asdict(doc), indent=2))
        return

    result = retrieve(
        store,
        path,
        raw=raw,
        preview=preview,
        lines=lines,
        default_lines=settings.preview_lines,
    )
    if result is None:
        logger.error(f"Document not found: {path}")
        logger.error("Run 'pf-docs list' to see available documents.")
        sys.exit(1)

    print(result.output)


def list_available(as_json: bool = False) -> None:
    """Print every library that can be downloaded."""
    if as_json:
        libs = [
            {
                "short_name": lib.short_name,
                "name": lib.name,
                "repo": lib.repo,
                "description": lib.description,
            }
            for lib in LIBRARIES
        ]
        print(json.dumps(libs, indent=2))
        return

    print("Available libraries:")
    for lib in LIBRARIES:
        print(f"  {lib.short_name:<24} {lib.description}")
        print(f"  {'':<24} {lib.repo}")
    print("")
    print(f"Total: {len(LIBRARIES)} libraries")
    print("To download: pf-docs init --libs <name> [<name>...]")


def list_docs(
    settings: Settings,
    lib: Optional[str] = None,
    tree: bool = False,
    as_json: bool = False,
    source: Optional[str] = None,
) -> None:
    """List indexed documents."""
    source_type = _parse_source(source, None)

    store = IndexStore(settings.index_path)
    docs = store.list_documents(lib, source_type)

    if as_json:
        print(json.dumps({"docs": [asdict(d) for d in docs]}, indent=2))
        return

    if not docs:
        if lib:
            print(f"No documents found for library: {lib}")
        else:
            print("No documents indexed yet.")
            print("Run 'pf-docs init --libs tca dependencies' to get started.")
        return

    print(format_document_list(docs, tree=tree))
    print("")
    print(f"Total: {len(docs)} documents")
    print("To view a document: pf-docs get <path>")


def stats(settings: Settings, as_json: bool = False) -> None:
    """Show document counts and libraries not yet indexed."""
    store = IndexStore(settings.index_path)
    index_stats = store.stats()

    if as_json:
        print(json.dumps(asdict(index_stats), indent=2))
        return

    print(format_stats(index_stats))

    not_indexed = [lib for lib in LIBRARIES if lib.short_name not in index_stats.by_library]
    if not_indexed:
        print("")
        print("Available libraries (not indexed):")
        for lib in not_indexed:
            print(f"  {lib.short_name}: {lib.description}")
        print(f"To add: pf-docs init --libs {not_indexed[0].short_name}")


def serve(settings: Settings, transport: str = "stdio") -> None:
    """Start an MCP server over the index.

    Args:
        settings: Settings naming the index file
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from pfdocs.server import create_mcp_server

    logger.info(f"Serving {settings.index_path} via {transport}")
    mcp = create_mcp_server(settings)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pf-docs",
        description="Search Point-Free library documentation, examples and episode code",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Download and index documentation for the given libraries",
    )
    init_parser.add_argument("-l", "--libs", nargs="+", help="Libraries to download (e.g. tca dependencies)")
    init_parser.add_argument("-a", "--all", action="store_true", help="Download all libraries")
    init_parser.add_argument("-e", "--examples", action="store_true", help="Download TCA example apps")
    init_parser.add_argument("-p", "--episodes", action="store_true", help="Download episode code samples")

    # update command
    update_parser = subparsers.add_parser(
        "update",
        help="Pull cloned repositories and re-index what changed",
    )
    update_parser.add_argument("-l", "--libs", nargs="+", help="Specific libraries to update")
    update_parser.add_argument("-e", "--examples", action="store_true", help="Update examples")
    update_parser.add_argument("-p", "--episodes", action="store_true", help="Update episodes")

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Full-text search (documentation only unless --source is given)",
    )
    search_parser.add_argument("query", help="Search terms")
    search_parser.add_argument("-l", "--lib", help="Limit search to one library")
    search_parser.add_argument("-n", "--limit", type=int, help="Max results to return (default: 10)")
    search_parser.add_argument(
        "-s",
        "--source",
        help=f"Source type: {', '.join(SOURCE_CHOICES)} (default: docs)",
    )
    search_parser.add_argument("-j", "--json", action="store_true", help="Output results as JSON")

    # get command
    get_parser = subparsers.add_parser(
        "get",
        help="Print a document by path (e.g. tca/Articles/Testing)",
    )
    get_parser.add_argument("path", help="Document path from search or list output")
    get_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    get_parser.add_argument("-r", "--raw", action="store_true", help="Full content without header")
    get_parser.add_argument("-p", "--preview", action="store_true", help="Show only the first lines")
    get_parser.add_argument("--lines", type=int, help="Number of lines to show in preview mode")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List indexed documents",
    )
    list_parser.add_argument("lib", nargs="?", help="Only list this library")
    list_parser.add_argument("-t", "--tree", action="store_true", help="Show as tree structure")
    list_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    list_parser.add_argument(
        "-a", "--available", action="store_true", help="Show all libraries available to download"
    )
    list_parser.add_argument("-s", "--source", help=f"Filter by source: {', '.join(SOURCE_CHOICES)}")

    # stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show indexing statistics",
    )
    stats_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start an MCP server over the index",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level_int)

    try:
        if args.command == "init":
            init(settings, args.libs, args.all, args.examples, args.episodes)
        elif args.command == "update":
            update(settings, args.libs, args.examples, args.episodes)
        elif args.command == "search":
            search(settings, args.query, args.lib, args.limit, args.source, args.json)
        elif args.command == "get":
            get(settings, args.path, args.json, args.raw, args.preview, args.lines)
        elif args.command == "list":
            if args.available:
                list_available(args.json)
            else:
                list_docs(settings, args.lib, args.tree, args.json, args.source)
        elif args.command == "stats":
            stats(settings, args.json)
        elif args.command == "serve":
            serve(settings, args.transport)
    except StoreError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
