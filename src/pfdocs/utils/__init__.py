"""Text normalization utilities for pf-docs."""

from pfdocs.utils.markdown import clean_content, clean_markdown, extract_title
from pfdocs.utils.titles import derive_title, first_type_name, format_episode_name

__all__ = [
    "clean_content",
    "clean_markdown",
    "derive_title",
    "extract_title",
    "first_type_name",
    "format_episode_name",
]
