"""Tests for the command-line interface."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from conftest import SAMPLE_TREE
from tocideator.cli import main
from tocideator.publish import ShareLink


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() installs a stderr handler; drop it so later tests see a clean root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    path = tmp_path / "outline.json"
    path.write_text(json.dumps({"tree": SAMPLE_TREE}), encoding="utf-8")
    return path


class TestNewCommand:
    """Tests for `tocideator new`."""

    def test_prints_default_outline(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Prints a default snapshot to stdout."""
        assert main(["new"]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["schema"] == "toc-ideator"
        assert [node["level"] for node in document["tree"]] == [0, 1]

    def test_title_and_output_file(self, tmp_path: Path) -> None:
        """Writes the titled outline to the requested file."""
        output = tmp_path / "out" / "new.json"

        assert main(["new", "--title", " Thesis ", "-o", str(output)]) == 0

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["tree"][0]["options"] == ["Thesis"]


class TestProjectionCommands:
    """Tests for markdown and preview."""

    def test_markdown(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Renders the snapshot as Markdown headings."""
        assert main(["markdown", str(snapshot_file)]) == 0

        assert capsys.readouterr().out.startswith("# Report\n## Intro\n### Background\n")

    def test_markdown_from_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Reads the snapshot from stdin when the input is '-'."""
        monkeypatch.setattr("sys.stdin", io.StringIO('[{"level": 0, "options": ["Doc"]}]'))

        assert main(["markdown", "-"]) == 0

        assert capsys.readouterr().out == "# Doc\n"

    def test_preview(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Prints the numbered, indented outline."""
        assert main(["preview", str(snapshot_file)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == ["Report", "1 Intro", "  1.1 Background"]
        assert lines[-1] == "3 Results"

    def test_preview_without_numbers(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Omits section numbers with --no-numbers."""
        assert main(["preview", "--no-numbers", str(snapshot_file)]) == 0

        assert capsys.readouterr().out.splitlines()[1] == "Intro"


class TestNormalizeAndCheck:
    """Tests for normalize and check."""

    def test_normalize_repairs(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Repairs malformed entries instead of failing."""
        path = tmp_path / "broken.json"
        path.write_text('["junk", {"options": [], "selected": 3}]', encoding="utf-8")

        assert main(["normalize", str(path)]) == 0

        tree = json.loads(capsys.readouterr().out)["tree"]
        assert [node["options"] for node in tree] == [["Untitled"], ["Untitled"]]

    def test_check_ok(self, tmp_path: Path, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A normalized snapshot passes the check."""
        normalized = tmp_path / "normalized.json"
        main(["normalize", str(snapshot_file), "-o", str(normalized)])
        capsys.readouterr()

        assert main(["check", str(normalized)]) == 0
        assert capsys.readouterr().out.strip() == "ok"

    def test_check_reports_problems(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Duplicate ids are reported with exit code 1."""
        path = tmp_path / "dupes.json"
        nodes = [
            {"id": "a", "level": 1, "options": ["A"]},
            {"id": "a", "level": 1, "options": ["B"]},
        ]
        path.write_text(json.dumps(nodes), encoding="utf-8")

        assert main(["check", str(path)]) == 1
        assert "duplicate id 'a'" in capsys.readouterr().out

    def test_check_reports_schema_errors(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Schema violations are reported with exit code 1."""
        path = tmp_path / "bad.json"
        path.write_text('[{"id": "a", "level": 1, "options": []}]', encoding="utf-8")

        assert main(["check", str(path)]) == 1
        assert capsys.readouterr().out

    def test_check_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Undecodable input is reported with exit code 1."""
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")

        assert main(["check", str(path)]) == 1
        assert "invalid JSON" in capsys.readouterr().out


class TestErrors:
    """Errors are reported on stderr with exit code 1."""

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing input file is reported on stderr."""
        assert main(["markdown", str(tmp_path / "missing.json")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_wrong_shape(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A document without a node array is reported on stderr."""
        path = tmp_path / "obj.json"
        path.write_text('{"nodes": []}', encoding="utf-8")

        assert main(["preview", str(path)]) == 1
        assert "expected array or {tree:[...]}" in capsys.readouterr().err


class TestPublishCommand:
    """Tests for `tocideator publish`."""

    def test_prints_share_url(self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Prints the share URL returned by the store."""
        link = ShareLink(id="a" * 32, url="http://localhost:8000/share/" + "a" * 32)

        with patch("tocideator.cli.publish_snapshot", new_callable=AsyncMock, return_value=link) as mock_publish:
            assert main(["publish", str(snapshot_file), "--endpoint", "http://localhost:8000/api/share"]) == 0

        assert capsys.readouterr().out.strip() == link.url
        assert mock_publish.await_args.kwargs["endpoint"] == "http://localhost:8000/api/share"
