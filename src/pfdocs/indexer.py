"""Indexing pipeline: discover, read, normalize and store source files."""

import logging
from datetime import datetime
from typing import Iterator

from pfdocs.config import SourceConfig
from pfdocs.discoverers import get_discoverer
from pfdocs.models import Document
from pfdocs.storage import IndexStore
from pfdocs.utils import clean_content, derive_title

logger = logging.getLogger(__name__)


def load_documents(source: SourceConfig) -> Iterator[Document]:
    """Yield a normalized Document for every readable file in a source.

    Missing roots are skipped. Files that can't be read or decoded are
    logged and skipped.
    """
    discoverer = get_discoverer(source.source_type)
    if discoverer is None:
        raise ValueError(f"No discoverer for source type: {source.source_type.value}")

    for root in source.roots:
        if not root.is_dir():
            logger.debug(f"  Skipping missing path: {root}")
            continue

        for found in discoverer.discover(root, source.patterns, source.library):
            try:
                raw = found.full_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"  Warning: Failed to index {found.full_path}: {e}")
                continue

            yield Document(
                library=source.library,
                path=found.logical_path,
                title=derive_title(raw, found.relative_path, source.source_type),
                content=clean_content(raw, source.source_type),
                source_type=source.source_type,
            )


def index_source(store: IndexStore, source: SourceConfig) -> int:
    """Index (or re-index) every file of a source.

    Args:
        store: Index to write into
        source: Source roots, patterns, library tag and type

    Returns:
        Number of documents written
    """
    count = store.upsert_many(load_documents(source))
    store.set_metadata(f"indexed_at:{source.library}", datetime.now().isoformat())
    return count
