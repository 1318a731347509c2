"""Tests for file helpers."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tocideator.file_utils import read_text_async, write_text_atomic, write_text_atomic_async


class TestWriteTextAtomic:
    """Tests for write_text_atomic function."""

    def test_writes_text_content(self, tmp_path: Path) -> None:
        """Writes text content to file."""
        path = tmp_path / "test.txt"

        write_text_atomic(path, "Hello, World!")

        assert path.read_text(encoding="utf-8") == "Hello, World!"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Creates missing parent directories."""
        path = tmp_path / "a" / "b" / "test.txt"

        write_text_atomic(path, "x")

        assert path.read_text(encoding="utf-8") == "x"

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        """Overwrites an existing file and leaves no temp files behind."""
        path = tmp_path / "test.txt"
        path.write_text("old", encoding="utf-8")

        write_text_atomic(path, "new")

        assert path.read_text(encoding="utf-8") == "new"
        assert list(tmp_path.iterdir()) == [path]

    def test_failed_replace_keeps_old_content(self, tmp_path: Path) -> None:
        """A failure before the rename leaves the previous file intact."""
        path = tmp_path / "test.txt"
        path.write_text("old", encoding="utf-8")

        with patch("tocideator.file_utils.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_text_atomic(path, "new")

        assert path.read_text(encoding="utf-8") == "old"
        assert list(tmp_path.iterdir()) == [path]

    def test_respects_encoding(self, tmp_path: Path) -> None:
        """Respects specified encoding."""
        path = tmp_path / "test.txt"

        write_text_atomic(path, "Café", encoding="latin-1")

        assert path.read_text(encoding="latin-1") == "Café"


class TestWriteTextAtomicAsync:
    """Tests for write_text_atomic_async function."""

    @pytest.mark.asyncio
    async def test_writes_text_content(self, tmp_path: Path) -> None:
        """Writes text content to file."""
        path = tmp_path / "test.txt"

        await write_text_atomic_async(path, "Hello, World!")

        assert path.read_text(encoding="utf-8") == "Hello, World!"


class TestReadTextAsync:
    """Tests for read_text_async function."""

    @pytest.mark.asyncio
    async def test_reads_text_content(self, tmp_path: Path) -> None:
        """Reads text content from file."""
        path = tmp_path / "test.txt"
        path.write_text("Hello, World!", encoding="utf-8")

        result = await read_text_async(path)

        assert result == "Hello, World!"

    @pytest.mark.asyncio
    async def test_respects_encoding(self, tmp_path: Path) -> None:
        """Respects specified encoding."""
        path = tmp_path / "test.txt"
        path.write_text("Café", encoding="latin-1")

        result = await read_text_async(path, encoding="latin-1")

        assert result == "Café"
