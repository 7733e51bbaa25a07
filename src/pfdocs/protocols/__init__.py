"""Protocol definitions for extensible components."""

from pfdocs.protocols.discoverer import Discoverer
from pfdocs.protocols.repository import RepositoryProvider

__all__ = ["Discoverer", "RepositoryProvider"]
