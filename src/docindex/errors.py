"""Exceptions raised by DocIndex."""

from __future__ import annotations

from pathlib import Path


class DocIndexError(Exception):
    """Base class for DocIndex errors."""


class UnreadableFileError(DocIndexError):
    """A single file could not be read or decoded as text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class RootDirectoryError(DocIndexError):
    """The scan root is missing or is not a directory."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"{reason}: {root}")
        self.root = root
        self.reason = reason
