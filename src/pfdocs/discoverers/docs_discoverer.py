"""Discoverer for DocC documentation catalogs."""

from pathlib import Path
from typing import Iterator

from pfdocs.discoverers.folder import walk_files
from pfdocs.models import DiscoveredFile, SourceType


class DocsDiscoverer:
    """Names articles "<library>/<relative path without extension>"."""

    source_type = SourceType.DOCS

    def discover(
        self, root: Path, patterns: tuple[str, ...], library: str
    ) -> Iterator[DiscoveredFile]:
        for full_path, rel_path in walk_files(root, patterns):
            yield DiscoveredFile(
                full_path=full_path,
                relative_path=rel_path.as_posix(),
                logical_path=f"{library}/{rel_path.with_suffix('').as_posix()}",
            )
