"""Exception classes for pf-docs."""


class PfDocsError(Exception):
    """Base class for all pf-docs errors."""

    pass


class StoreError(PfDocsError):
    """Raised when the index store cannot be opened or migrated."""

    pass


class RepositoryError(PfDocsError):
    """Raised when cloning or pulling a source repository fails."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
