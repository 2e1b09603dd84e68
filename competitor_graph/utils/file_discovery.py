"""
File discovery utilities for competitor_graph.

Provides functions to find and filter files in directories.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def find_files(
    directory: Path,
    extensions: list[str] | None = None,
    recursive: bool = False,
    limit: int | None = None,
) -> list[Path]:
    """
    Find files with the given extensions, sorted by path.

    Args:
        directory: Directory to search
        extensions: Extensions to include (default: ['.json'])
        recursive: Search subdirectories too
        limit: Optional limit on number of files to return (applied after sorting)

    Returns:
        List of file paths
    """
    if extensions is None:
        extensions = [".json"]

    if not directory.exists():
        logger.warning(f"⚠ Directory not found: {directory}")
        return []

    pattern_prefix = "**/*" if recursive else "*"
    files: set[Path] = set()
    for ext in extensions:
        files.update(p for p in directory.glob(f"{pattern_prefix}{ext}") if p.is_file())

    ordered = sorted(files)
    if limit:
        ordered = ordered[:limit]
    return ordered
