"""Test setup for tocideator."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tocideator.normalizer import normalize_imported_tree  # noqa: E402
from tocideator.schemas import Forest  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows skipping the slower end-to-end tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests that spawn subprocesses or servers",
    )


SAMPLE_TREE = [
    {"id": "title", "level": 0, "options": ["Report"]},
    {
        "id": "a",
        "options": ["Intro"],
        "children": [
            {"id": "a1", "options": ["Background"], "children": [{"id": "a1x", "options": ["Detail"]}]},
            {"id": "a2", "options": ["Scope", "Goals"], "selected": 1},
        ],
    },
    {"id": "b", "options": ["Method"], "children": [{"id": "b1", "options": ["Data"]}]},
    {"id": "c", "options": ["Results"]},
]


@pytest.fixture
def forest() -> Forest:
    """Title plus three chapters, nested three levels deep under the first.

    Title "Report"
    1 Intro (a)
      1.1 Background (a1)
        1.1.1 Detail (a1x)
      1.2 Goals (a2)
    2 Method (b)
      2.1 Data (b1)
    3 Results (c)
    """
    return normalize_imported_tree(SAMPLE_TREE)
