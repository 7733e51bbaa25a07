"""Full-text query engine over the docs_fts shadow table."""

import logging
import re
import sqlite3
from typing import Optional

from pfdocs.models import SearchResult, SourceType

logger = logging.getLogger(__name__)

HIGHLIGHT = "**"
SNIPPET_TOKENS = 32
FALLBACK_SNIPPET_CHARS = 200

_QUOTES = re.compile(r"[\"']")


def query_terms(query: str) -> list[str]:
    """Split a free-text query into terms, dropping quote characters."""
    return [term for term in _QUOTES.sub("", query).split() if term]


def build_match_query(query: str) -> str:
    """Build an FTS5 MATCH expression: every term quoted and prefix-matched.

    FTS5 ANDs adjacent terms, so "testing reducer" becomes
    '"testing"* "reducer"*'. Returns "" when there are no terms.
    """
    return " ".join(f'"{term}"*' for term in query_terms(query))


def _filters(
    library: Optional[str], source_type: Optional[SourceType]
) -> tuple[str, list[str]]:
    sql = ""
    params: list[str] = []
    if library:
        sql += " AND library = ?"
        params.append(library)
    if source_type is not None:
        sql += " AND source_type = ?"
        params.append(source_type.value)
    return sql, params


def _to_result(row: sqlite3.Row) -> SearchResult:
    return SearchResult(
        library=row["library"],
        path=row["path"],
        title=row["title"] or "",
        snippet=row["snippet"] or "",
        score=float(row["score"]),
        source_type=SourceType(row["source_type"]),
    )


def ranked_search(
    conn: sqlite3.Connection,
    match_query: str,
    library: Optional[str] = None,
    source_type: Optional[SourceType] = None,
    limit: int = 10,
) -> list[SearchResult]:
    """Run a BM25-ranked MATCH query. Lower scores are more relevant.

    Raises sqlite3.Error if the query cannot run.
    """
    sql = f"""
        SELECT
            library,
            path,
            title,
            source_type,
            snippet(docs_fts, 1, '{HIGHLIGHT}', '{HIGHLIGHT}', '...', {SNIPPET_TOKENS}) AS snippet,
            bm25(docs_fts) AS score
        FROM docs_fts
        WHERE docs_fts MATCH ?
    """
    params: list = [match_query]

    filter_sql, filter_params = _filters(library, source_type)
    sql += filter_sql + " ORDER BY score LIMIT ?"
    params += filter_params + [limit]

    return [_to_result(row) for row in conn.execute(sql, params)]


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def fallback_search(
    conn: sqlite3.Connection,
    query: str,
    library: Optional[str] = None,
    source_type: Optional[SourceType] = None,
    limit: int = 10,
) -> list[SearchResult]:
    """Unranked substring search over titles and content.

    Every hit scores 0 and carries the start of its content as snippet.
    Never raises; returns [] if this query fails too.
    """
    needle = " ".join(query_terms(query))
    if not needle:
        return []

    pattern = f"%{_escape_like(needle)}%"
    sql = f"""
        SELECT
            library,
            path,
            title,
            source_type,
            substr(content, 1, {FALLBACK_SNIPPET_CHARS}) AS snippet,
            0 AS score
        FROM docs
        WHERE (title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\')
    """
    params: list = [pattern, pattern]

    filter_sql, filter_params = _filters(library, source_type)
    sql += filter_sql + " LIMIT ?"
    params += filter_params + [limit]

    try:
        return [_to_result(row) for row in conn.execute(sql, params)]
    except (sqlite3.Error, ValueError) as e:
        logger.warning(f"Fallback search failed: {e}")
        return []


def search(
    conn: sqlite3.Connection,
    query: str,
    library: Optional[str] = None,
    source_type: Optional[SourceType] = SourceType.DOCS,
    limit: int = 10,
) -> list[SearchResult]:
    """Search the index, degrading to substring matching if FTS fails.

    Args:
        conn: Open connection to the index
        query: Free-text query; quotes are ignored
        library: Only return documents from this library
        source_type: Only return this source type; None searches all
        limit: Maximum number of results

    Returns:
        Results ordered by relevance, or [] when the query has no terms
    """
    match_query = build_match_query(query)
    if not match_query or limit <= 0:
        return []

    try:
        return ranked_search(conn, match_query, library, source_type, limit)
    except (sqlite3.Error, ValueError) as e:
        logger.warning(f"Full-text search failed, falling back to substring search: {e}")
        return fallback_search(conn, query, library, source_type, limit)
