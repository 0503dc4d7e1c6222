"""Utility helpers for working with files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

WalkErrorHandler = Callable[[Path, OSError], None]


def iter_document_paths(
    root: Path,
    extensions: Iterable[str],
    *,
    ignore_dirs: Iterable[str] = (),
    on_error: Optional[WalkErrorHandler] = None,
) -> Iterator[Path]:
    """Yield files under ``root`` with a matching extension, sorted by relative path.

    Directories that cannot be listed are passed to ``on_error`` with the
    raised ``OSError`` and their contents are left out.
    """
    wanted = {ext.lower() for ext in extensions}
    ignored = set(ignore_dirs)

    def _walk_error(exc: OSError) -> None:
        if on_error is not None:
            on_error(Path(exc.filename) if exc.filename else root, exc)

    candidates = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_error):
        dirnames[:] = [name for name in dirnames if name not in ignored]
        directory = Path(dirpath)
        for filename in filenames:
            if Path(filename).suffix.lower() in wanted:
                candidates.append((directory / filename).relative_to(root))
    for relative in sorted(candidates, key=lambda p: p.as_posix()):
        yield root / relative


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""
    return path.relative_to(root).as_posix()
