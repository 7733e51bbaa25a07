"""Source file discoverers for pf-docs."""

from typing import Optional

from pfdocs.discoverers.docs_discoverer import DocsDiscoverer
from pfdocs.discoverers.episodes_discoverer import EpisodesDiscoverer
from pfdocs.discoverers.examples_discoverer import ExamplesDiscoverer
from pfdocs.models import SourceType
from pfdocs.protocols import Discoverer

# Registry of available discoverers
_DISCOVERERS: list[Discoverer] = [
    DocsDiscoverer(),
    ExamplesDiscoverer(),
    EpisodesDiscoverer(),
]


def get_discoverer(source_type: SourceType) -> Optional[Discoverer]:
    """Find the discoverer responsible for a source type.

    Args:
        source_type: The source type being indexed

    Returns:
        A Discoverer for that source type, or None
    """
    for discoverer in _DISCOVERERS:
        if discoverer.source_type is source_type:
            return discoverer
    return None


__all__ = ["get_discoverer", "DocsDiscoverer", "ExamplesDiscoverer", "EpisodesDiscoverer"]
