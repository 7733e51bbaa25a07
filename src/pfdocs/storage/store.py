"""SQLite-backed storage for the pf-docs index."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from pfdocs.exceptions import StoreError
from pfdocs.models import Document, DocumentSummary, IndexStats, SearchResult, SourceType
from pfdocs.storage import query
from pfdocs.storage.schema import (
    FTS_REBUILD,
    FTS_TABLE,
    INDEXES,
    LEGACY_TRIGGERS,
    SCHEMA_VERSION,
    TABLES,
)

logger = logging.getLogger(__name__)


def _columns(conn: sqlite3.Connection, table: str) -> set[str]:
    return {row["name"] for row in conn.execute(f"PRAGMA table_info({table})")}


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block as one write transaction, rolling back on any error."""
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")


class IndexStore:
    """SQLite-backed document index with an FTS5 shadow table.

    No connection is held between calls: every public method opens one,
    does its work and closes it. The schema is created or migrated the
    first time a connection is opened.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Autocommit mode; writes go through transaction()
            conn = sqlite3.connect(self.path, isolation_level=None)
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Cannot open index at {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = self._connect()
        try:
            if not self._ready:
                self._migrate(conn)
                self._ready = True
            yield conn
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create or upgrade the schema. Safe to call repeatedly."""
        self._ready = False
        with self.connection():
            pass

    def _migrate(self, conn: sqlite3.Connection) -> None:
        try:
            with transaction(conn):
                for statement in _statements(TABLES):
                    conn.execute(statement)

                if "source_type" not in _columns(conn, "docs"):
                    logger.info("Adding source_type column to existing index")
                    conn.execute(
                        "ALTER TABLE docs ADD COLUMN source_type TEXT NOT NULL DEFAULT 'docs'"
                    )

                for statement in _statements(INDEXES):
                    conn.execute(statement)

                for trigger in LEGACY_TRIGGERS:
                    conn.execute(f"DROP TRIGGER IF EXISTS {trigger}")

                fts_columns = _columns(conn, "docs_fts")
                if "source_type" not in fts_columns:
                    if fts_columns:
                        logger.info("Rebuilding full-text index")
                        conn.execute("DROP TABLE docs_fts")
                    conn.execute(FTS_TABLE)
                    conn.execute(FTS_REBUILD)

                conn.execute(
                    "INSERT OR REPLACE INTO metadata (key, value) VALUES ('schema_version', ?)",
                    (SCHEMA_VERSION,),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Cannot prepare index at {self.path}: {e}") from e

    # Writes

    def _upsert(self, conn: sqlite3.Connection, doc: Document) -> None:
        with transaction(conn):
            row = conn.execute(
                "SELECT id FROM docs WHERE library = ? AND path = ?",
                (doc.library, doc.path),
            ).fetchone()

            if row:
                doc_id = row["id"]
                conn.execute("DELETE FROM docs_fts WHERE rowid = ?", (doc_id,))
                conn.execute(
                    "UPDATE docs SET title = ?, content = ?, source_type = ? WHERE id = ?",
                    (doc.title, doc.content, doc.source_type.value, doc_id),
                )
            else:
                cursor = conn.execute(
                    """INSERT INTO docs (library, path, title, content, source_type)
                       VALUES (?, ?, ?, ?, ?)""",
                    (doc.library, doc.path, doc.title, doc.content, doc.source_type.value),
                )
                doc_id = cursor.lastrowid

            conn.execute(
                """INSERT INTO docs_fts (rowid, title, content, library, path, source_type)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (doc_id, doc.title, doc.content, doc.library, doc.path, doc.source_type.value),
            )

    def upsert(self, doc: Document) -> None:
        """Insert a document or replace the one with the same (library, path)."""
        with self.connection() as conn:
            self._upsert(conn, doc)

    def upsert_many(self, docs: Iterable[Document]) -> int:
        """Upsert documents over one connection, one transaction each.

        Returns the number of documents written.
        """
        count = 0
        with self.connection() as conn:
            for doc in docs:
                self._upsert(conn, doc)
                count += 1
        return count

    def delete(self, library: str, path: str) -> bool:
        """Remove a document and its full-text entry. Returns False if absent."""
        with self.connection() as conn:
            with transaction(conn):
                row = conn.execute(
                    "SELECT id FROM docs WHERE library = ? AND path = ?", (library, path)
                ).fetchone()
                if row is None:
                    return False
                conn.execute("DELETE FROM docs_fts WHERE rowid = ?", (row["id"],))
                conn.execute("DELETE FROM docs WHERE id = ?", (row["id"],))
                return True

    def set_metadata(self, key: str, value: str) -> None:
        """Store a metadata key-value pair."""
        with self.connection() as conn:
            with transaction(conn):
                conn.execute(
                    "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                    (key, value),
                )

    def get_metadata(self, key: str) -> Optional[str]:
        """Retrieve a metadata value by key."""
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    # Reads

    def list_documents(
        self,
        library: Optional[str] = None,
        source_type: Optional[SourceType] = None,
    ) -> list[DocumentSummary]:
        """List documents without their bodies, grouped by source type then library."""
        sql = "SELECT library, path, title, source_type FROM docs WHERE 1 = 1"
        params: list[str] = []
        if library:
            sql += " AND library = ?"
            params.append(library)
        if source_type is not None:
            sql += " AND source_type = ?"
            params.append(source_type.value)
        sql += " ORDER BY source_type, library, path"

        with self.connection() as conn:
            return [
                DocumentSummary(
                    library=row["library"],
                    path=row["path"],
                    title=row["title"] or "",
                    source_type=SourceType(row["source_type"]),
                )
                for row in conn.execute(sql, params)
            ]

    def get_document(self, path: str) -> Optional[Document]:
        """Look up a document by logical path alone."""
        with self.connection() as conn:
            rows = conn.execute(
                """SELECT library, path, title, content, source_type
                   FROM docs WHERE path = ? ORDER BY id""",
                (path,),
            ).fetchall()

        if not rows:
            return None
        if len(rows) > 1:
            libraries = ", ".join(row["library"] for row in rows)
            logger.warning(f"Path {path} exists in several libraries ({libraries}); using the first")

        row = rows[0]
        return Document(
            library=row["library"],
            path=row["path"],
            title=row["title"] or "",
            content=row["content"] or "",
            source_type=SourceType(row["source_type"]),
        )

    def stats(self) -> IndexStats:
        """Count documents in total, per library and per source type."""
        with self.connection() as conn:
            total = conn.execute("SELECT COUNT(*) AS count FROM docs").fetchone()["count"]
            by_library = {
                row["library"]: row["count"]
                for row in conn.execute(
                    "SELECT library, COUNT(*) AS count FROM docs GROUP BY library ORDER BY library"
                )
            }
            by_source = {
                row["source_type"]: row["count"]
                for row in conn.execute(
                    """SELECT source_type, COUNT(*) AS count FROM docs
                       GROUP BY source_type ORDER BY source_type"""
                )
            }
        return IndexStats(total_docs=total, by_library=by_library, by_source=by_source)

    def search(
        self,
        text: str,
        library: Optional[str] = None,
        source_type: Optional[SourceType] = SourceType.DOCS,
        limit: int = 10,
    ) -> list[SearchResult]:
        """Full-text search; see pfdocs.storage.query.search."""
        with self.connection() as conn:
            return query.search(conn, text, library=library, source_type=source_type, limit=limit)


def _statements(script: str) -> list[str]:
    """Split a schema script into statements, dropping comments."""
    lines = [line for line in script.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]
