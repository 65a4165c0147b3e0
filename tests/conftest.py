from __future__ import annotations

import logging
from pathlib import Path

import pytest

from apibook.compiler import BookCompiler


@pytest.fixture
def book_dir(tmp_path: Path) -> Path:
    """Provide an empty book directory rooted at the pytest tmp_path."""
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def compiler(book_dir: Path) -> BookCompiler:
    return BookCompiler(book_dir)


@pytest.fixture(autouse=True)
def _propagate_apibook_logs() -> None:
    """Keep apibook records reaching caplog even after the CLI configured logging."""
    logging.getLogger("apibook").propagate = True
