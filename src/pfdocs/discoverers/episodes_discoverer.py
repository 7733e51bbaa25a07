"""Discoverer for episode code samples."""

import re
from pathlib import Path
from typing import Iterator

from pfdocs.discoverers.folder import walk_files
from pfdocs.models import DiscoveredFile, SourceType

_EPISODE_DIR = re.compile(r"^\d+-")


class EpisodesDiscoverer:
    """Names files "<library>/<episode dir>/<path inside the episode>".

    Only files inside top-level numbered episode directories
    (e.g. 0156-testable-state) are considered.
    """

    source_type = SourceType.EPISODES

    def discover(
        self, root: Path, patterns: tuple[str, ...], library: str
    ) -> Iterator[DiscoveredFile]:
        for full_path, rel_path in walk_files(root, patterns):
            if len(rel_path.parts) < 2 or not _EPISODE_DIR.match(rel_path.parts[0]):
                continue
            yield DiscoveredFile(
                full_path=full_path,
                relative_path=rel_path.as_posix(),
                logical_path=f"{library}/{rel_path.as_posix()}",
            )
