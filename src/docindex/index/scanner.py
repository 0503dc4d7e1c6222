"""Document scanning stage."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from docindex.config import AppConfig
from docindex.errors import RootDirectoryError, UnreadableFileError
from docindex.ingestion.markdown_loader import load_document
from docindex.models import Document, SkippedFile
from docindex.utils.files import iter_document_paths, relative_posix

LOGGER = logging.getLogger(__name__)

ScanOutcome = Union[Document, SkippedFile]


@dataclass(slots=True)
class ScanResult:
    documents: list[Document] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    def add(self, outcome: ScanOutcome) -> None:
        if isinstance(outcome, SkippedFile):
            self.skipped.append(outcome)
        else:
            self.documents.append(outcome)

    def sort(self) -> None:
        self.documents.sort(key=lambda document: document.path)
        self.skipped.sort(key=lambda skipped: skipped.path)


class Scanner:
    """Walks a content tree and loads every matching file as a Document."""

    def __init__(
        self,
        root: Path,
        *,
        variant_suffix: str,
        extensions: Iterable[str],
        ignore_dirs: Iterable[str] = (),
        concurrency: int = 1,
    ) -> None:
        self.root = Path(root)
        self.variant_suffix = variant_suffix
        self.extensions = tuple(extensions)
        self.ignore_dirs = tuple(ignore_dirs)
        self.concurrency = max(concurrency, 1)

    @classmethod
    def from_config(cls, root: Path, config: AppConfig) -> "Scanner":
        return cls(
            root,
            variant_suffix=config.variant_suffix,
            extensions=config.normalized_extensions(),
            ignore_dirs=config.ignore_dirs,
            concurrency=config.resolve_concurrency(),
        )

    def check_root(self) -> None:
        if not self.root.exists():
            raise RootDirectoryError(self.root, "Root directory not found")
        if not self.root.is_dir():
            raise RootDirectoryError(self.root, "Root path is not a directory")
        if not os.access(self.root, os.R_OK | os.X_OK):
            raise RootDirectoryError(self.root, "Root directory is not readable")

    def iter_paths(self, skipped: Optional[list[SkippedFile]] = None) -> Iterator[Path]:
        """Yield candidate files; unreadable directories are logged and added to ``skipped``."""
        self.check_root()

        def _on_error(path: Path, exc: OSError) -> None:
            reason = f"unreadable directory ({exc.strerror or exc})"
            LOGGER.warning("Skipping %s: %s", path, reason)
            if skipped is not None:
                skipped.append(SkippedFile(path=relative_posix(path, self.root), reason=reason))

        yield from iter_document_paths(
            self.root, self.extensions, ignore_dirs=self.ignore_dirs, on_error=_on_error
        )

    def iter_documents(self) -> Iterator[Document]:
        """Lazily load documents one by one; unreadable files are logged and skipped."""
        for path in self.iter_paths():
            outcome = self._load(path)
            if isinstance(outcome, Document):
                yield outcome

    def scan(self) -> ScanResult:
        """Load every document, reading files on up to ``concurrency`` threads."""
        result = ScanResult()
        paths = list(self.iter_paths(result.skipped))
        lock = threading.Lock()

        def _work(path: Path) -> None:
            outcome = self._load(path)
            with lock:
                result.add(outcome)

        LOGGER.debug("Scanning %d files under %s with %d worker(s)", len(paths), self.root, self.concurrency)
        if self.concurrency == 1 or len(paths) < 2:
            for path in paths:
                _work(path)
        else:
            with ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="docindex-scan") as pool:
                # Consume the iterator so worker exceptions surface here
                list(pool.map(_work, paths))

        result.sort()
        return result

    def _load(self, path: Path) -> ScanOutcome:
        try:
            return load_document(path, self.root, variant_suffix=self.variant_suffix)
        except UnreadableFileError as exc:
            LOGGER.warning("Skipping %s", exc)
            return SkippedFile(path=relative_posix(path, self.root), reason=exc.reason)
