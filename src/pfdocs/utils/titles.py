"""Fallback titles for files without a usable heading."""

import re
from pathlib import PurePosixPath
from typing import Optional

from pfdocs.models import SourceType
from pfdocs.utils.markdown import extract_title

_TYPE_DECLARATION = re.compile(
    r"^[ \t]*(?:(?:public|private|internal|fileprivate|package|open|final)[ \t]+)*"
    r"(?:struct|class|enum|actor)[ \t]+([A-Za-z_][A-Za-z0-9_]*)",
    re.MULTILINE,
)
_EPISODE_DIR = re.compile(r"^(\d+)-(.+)$")


def format_episode_name(dir_name: str) -> str:
    """Turn "0156-testable-state" into "Ep156: Testable State".

    Names that don't start with a number are returned unchanged.
    """
    match = _EPISODE_DIR.match(dir_name)
    if not match:
        return dir_name
    number = int(match.group(1))
    words = [w[:1].upper() + w[1:] for w in match.group(2).split("-") if w]
    return f"Ep{number}: {' '.join(words)}"


def first_type_name(source: str) -> Optional[str]:
    """Name of the first struct/class/enum/actor declared in a source file."""
    match = _TYPE_DECLARATION.search(source)
    return match.group(1) if match else None


def derive_title(raw: str, relative_path: str, source_type: SourceType) -> str:
    """Pick a display title for a file.

    Headings and front matter in the raw text win; otherwise the title
    comes from the file name, the first declared type, or the episode
    directory depending on the source type.
    """
    title = extract_title(raw)
    if title:
        return title

    path = PurePosixPath(relative_path)
    if source_type is SourceType.EXAMPLES:
        return first_type_name(raw) or path.stem
    if source_type is SourceType.EPISODES:
        episode = format_episode_name(path.parts[0]) if len(path.parts) > 1 else path.stem
        return f"{episode} ({path.name})"
    return path.stem
