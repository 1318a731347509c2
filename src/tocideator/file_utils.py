"""File helpers shared by the local autosave and the share store."""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path


def write_text_atomic(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` through a temp file in the same directory.

    Readers see either the old file or the complete new one, never a partial
    write. Parent directories are created as needed.

    Args:
        path: Destination file.
        content: Text to write.
        encoding: Text encoding to use.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def write_text_atomic_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Run :func:`write_text_atomic` in a worker thread."""
    await asyncio.to_thread(write_text_atomic, path, content, encoding)


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)
