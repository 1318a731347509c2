"""Tests for the local autosave slot."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tocideator.persistence import LocalStore
from tocideator.schemas import TitleNode


class TestLocalStore:
    """Tests for LocalStore."""

    def test_save_and_load(self, tmp_path: Path, forest) -> None:
        """A saved outline loads back unchanged."""
        store = LocalStore(tmp_path / "nested" / "outline.json")

        assert store.save(forest) is True
        loaded = store.load()

        assert [node.model_dump() for node in loaded] == [node.model_dump() for node in forest]

    def test_saved_file_is_snapshot(self, tmp_path: Path, forest) -> None:
        """The save file uses the snapshot format."""
        store = LocalStore(tmp_path / "outline.json")
        store.save(forest)

        data = json.loads(store.path.read_text(encoding="utf-8"))

        assert data["schema"] == "toc-ideator"
        assert data["tree"][0]["level"] == 0

    def test_load_missing(self, tmp_path: Path) -> None:
        """Loading without a save file returns None."""
        assert LocalStore(tmp_path / "missing.json").load() is None

    @pytest.mark.parametrize("content", ["{not json", '{"nodes": 1}', ""])
    def test_load_unreadable(self, tmp_path: Path, content: str) -> None:
        """Unreadable save files are ignored."""
        path = tmp_path / "outline.json"
        path.write_text(content, encoding="utf-8")

        assert LocalStore(path).load() is None

    def test_load_migrates_title_less_save(self, tmp_path: Path) -> None:
        """Old saves without a title gain one on load."""
        path = tmp_path / "outline.json"
        path.write_text(json.dumps([{"id": "a", "level": 1, "options": ["Intro"]}]), encoding="utf-8")

        forest = LocalStore(path).load()

        assert isinstance(forest[0], TitleNode)
        assert forest[1].id == "a"

    def test_save_failure_is_not_fatal(self, tmp_path: Path, forest, caplog) -> None:
        """A failed write is logged and reported as False."""
        target = tmp_path / "outline.json"
        target.mkdir()

        assert LocalStore(target).save(forest) is False

        assert "Autosave failed" in caplog.text
        assert list(tmp_path.iterdir()) == [target]

    @pytest.mark.asyncio
    async def test_save_async(self, tmp_path: Path, forest) -> None:
        """The async save writes a loadable file."""
        store = LocalStore(tmp_path / "outline.json")

        assert await store.save_async(forest) is True

        assert store.load()[1].title == "Intro"

    @pytest.mark.asyncio
    async def test_save_async_snapshots_before_writing(
        self, tmp_path: Path, forest, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Edits made while the write is in flight do not leak into it."""
        written: list[str] = []

        async def fake_write(path: Path, content: str) -> None:
            forest[1].options[0] = "Changed"
            written.append(content)

        monkeypatch.setattr("tocideator.persistence.write_text_atomic_async", fake_write)

        assert await LocalStore(tmp_path / "outline.json").save_async(forest) is True
        assert '"Intro"' in written[0]
        assert "Changed" not in written[0]

    def test_clear(self, tmp_path: Path, forest) -> None:
        """Clearing removes the save and tolerates repeats."""
        store = LocalStore(tmp_path / "outline.json")
        store.save(forest)

        store.clear()
        store.clear()

        assert store.load() is None
