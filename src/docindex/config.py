"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_VARIANT_SUFFIX = "_CN"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md",)
DEFAULT_IGNORE_DIRS: Tuple[str, ...] = (".git", "node_modules", ".venv", "__pycache__")
DEFAULT_ENTRY_STEMS: Tuple[str, ...] = ("readme", "index")


def _get_default_concurrency() -> int:
    """Number of workers used when none is configured."""
    return os.cpu_count() or 1


@dataclass(slots=True)
class AppConfig:
    variant_suffix: str = DEFAULT_VARIANT_SUFFIX
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    concurrency: Optional[int] = None
    ignore_dirs: Tuple[str, ...] = DEFAULT_IGNORE_DIRS
    # Documents with these base stems are index pages and never orphans
    entry_stems: Tuple[str, ...] = DEFAULT_ENTRY_STEMS

    def __post_init__(self) -> None:
        if not self.variant_suffix:
            raise ValueError("variant_suffix must not be empty")
        if self.concurrency is not None and self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    def resolve_concurrency(self) -> int:
        if self.concurrency is None:
            return _get_default_concurrency()
        return self.concurrency

    def normalized_extensions(self) -> Tuple[str, ...]:
        """Lower-cased extensions, each with a leading dot, deduplicated."""
        seen: list[str] = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in seen:
                seen.append(ext)
        return tuple(seen)
