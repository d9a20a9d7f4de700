"""Filesystem writer for generated artifacts.

The writer owns file creation.  Its only guard is
:func:`ensure_fresh_directory`: generating an artifact whose directory
already exists is refused, never merged.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..errors import DirectoryExists


def ensure_fresh_directory(path: str | Path) -> Path:
    """Create *path* (and parents), refusing if it already exists.

    Raises:
        DirectoryExists: If anything already exists at *path*.
    """
    directory = Path(path)
    if directory.exists():
        raise DirectoryExists(directory)
    directory.mkdir(parents=True)
    return directory


def write_file(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content*, overwriting any existing file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out


async def write_artifacts(root: str | Path, files: dict[str, str]) -> list[Path]:
    """Write an artifact set below *root*.

    Args:
        root: Base directory the relative paths are resolved against.
        files: Mapping of POSIX relative path -> file content.

    Returns:
        The written paths, in the mapping's order.
    """
    base = Path(root)
    written: list[Path] = []
    for rel_path, content in files.items():
        out = await asyncio.to_thread(write_file, base / rel_path, content)
        written.append(out)
    return written
