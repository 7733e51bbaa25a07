"""Protocol for repository acquisition."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RepositoryProvider(Protocol):
    """Protocol for fetching source repositories onto local disk.

    Source ids are library short names, "examples" or "episodes".
    """

    def is_acquired(self, source_id: str) -> bool:
        """Check whether the source has been cloned."""
        ...

    def acquire(self, source_id: str) -> None:
        """Clone the source. Raises RepositoryError on failure."""
        ...

    def refresh(self, source_id: str) -> bool:
        """Pull the latest content and report whether anything changed."""
        ...
