"""Shared directory walking for discoverers."""

from pathlib import Path
from typing import Iterator

SKIP_DIRS = {
    "__pycache__",
    "node_modules",
    "build",
    "dist",
    "DerivedData",
    "Pods",
    "Carthage",
}


def should_skip(path: Path) -> bool:
    """Check if a file should be skipped.

    Skips hidden files and folders, version control and build artifacts.
    """
    parts = path.parts
    if any(part.startswith(".") for part in parts):
        return True
    return any(part in SKIP_DIRS or part.endswith(".xcodeproj") for part in parts)


def walk_files(root: Path, patterns: tuple[str, ...]) -> Iterator[tuple[Path, Path]]:
    """Yield (full_path, relative_path) for files under root matching patterns.

    Results are sorted and de-duplicated across patterns. A missing root
    yields nothing.
    """
    if not root.is_dir():
        return

    seen: set[Path] = set()
    for pattern in patterns:
        for full_path in root.glob(pattern):
            if full_path in seen or not full_path.is_file():
                continue
            rel_path = full_path.relative_to(root)
            if should_skip(rel_path):
                continue
            seen.add(full_path)

    for full_path in sorted(seen):
        yield full_path, full_path.relative_to(root)
