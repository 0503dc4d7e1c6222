"""Shared fixtures for DocIndex tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Union

import pytest

TreeSpec = Dict[str, Union[str, bytes]]


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeSpec], Path]:
    """Build a content tree under ``tmp_path/content`` from a path -> content mapping."""

    def _make(files: TreeSpec) -> Path:
        root = tmp_path / "content"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make
