"""Protocol for source file discovery."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from pfdocs.models import DiscoveredFile, SourceType


@runtime_checkable
class Discoverer(Protocol):
    """Protocol for walking a source root and naming what it finds.

    Each source type lays out its files differently, so each has its own
    rule for building logical paths. Uses structural subtyping - no
    inheritance required.
    """

    @property
    def source_type(self) -> SourceType:
        """Return the source type this discoverer handles."""
        ...

    def discover(
        self, root: Path, patterns: tuple[str, ...], library: str
    ) -> Iterator[DiscoveredFile]:
        """Yield files under root matching any of the glob patterns.

        A missing root yields nothing.
        """
        ...
