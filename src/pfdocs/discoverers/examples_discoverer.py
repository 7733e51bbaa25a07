"""Discoverer for example app source files."""

from pathlib import Path
from typing import Iterator

from pfdocs.discoverers.folder import walk_files
from pfdocs.models import DiscoveredFile, SourceType


class ExamplesDiscoverer:
    """Names files "<library>/<example app>/<relative path>".

    Each root is one example app (e.g. Examples/SyncUps), so the app name
    is the root directory's name.
    """

    source_type = SourceType.EXAMPLES

    def discover(
        self, root: Path, patterns: tuple[str, ...], library: str
    ) -> Iterator[DiscoveredFile]:
        category = root.name
        for full_path, rel_path in walk_files(root, patterns):
            yield DiscoveredFile(
                full_path=full_path,
                relative_path=rel_path.as_posix(),
                logical_path=f"{library}/{category}/{rel_path.as_posix()}",
            )
