"""Pytest configuration and fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src directory to Python path for tests
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

# Check Python version - project requires 3.11+
if sys.version_info < (3, 11):
    pytest.skip(
        "This project requires Python 3.11+",
        allow_module_level=True,
    )

from pagescribe.dom import PageDocument  # noqa: E402


@pytest.fixture
def make_doc():
    """Build a PageDocument from a body fragment."""

    def _make(body: str, *, head: str = "") -> PageDocument:
        return PageDocument.from_html(f"<html><head>{head}</head><body>{body}</body></html>")

    return _make
