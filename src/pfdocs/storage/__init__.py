"""Persistent index storage for pf-docs."""

from pfdocs.storage.store import IndexStore

__all__ = ["IndexStore"]
