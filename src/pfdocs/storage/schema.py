"""Database schema for the pf-docs index."""

SCHEMA_VERSION = "2"

# Tables that exist in every version of the index. Statements touching
# source_type live in INDEXES so they run after the migration adds it.
TABLES = """
-- Documents table: one row per (library, path)
CREATE TABLE IF NOT EXISTS docs (
    id INTEGER PRIMARY KEY,
    library TEXT NOT NULL,
    path TEXT NOT NULL,
    title TEXT,
    content TEXT,
    source_type TEXT NOT NULL DEFAULT 'docs',
    UNIQUE(library, path)
);

-- Metadata table: schema version and per-source indexing times
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""

INDEXES = """
CREATE INDEX IF NOT EXISTS idx_docs_path ON docs(path);
CREATE INDEX IF NOT EXISTS idx_docs_source ON docs(source_type, library, path);
"""

# Full-text shadow of docs, keyed by docs.id as rowid. Maintained by
# IndexStore in the same transaction as every docs write.
FTS_TABLE = """
CREATE VIRTUAL TABLE docs_fts USING fts5(
    title,
    content,
    library,
    path,
    source_type UNINDEXED
);
"""

FTS_REBUILD = """
INSERT INTO docs_fts (rowid, title, content, library, path, source_type)
SELECT id, title, content, library, path, source_type FROM docs
"""

# Sync triggers created by earlier versions of the index
LEGACY_TRIGGERS = ("docs_ai", "docs_ad", "docs_au")
