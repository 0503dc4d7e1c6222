"""Core DocIndex data models."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LanguageVariant(str, Enum):
    BASE = "base"
    CN = "cn"


class LinkStatus(str, Enum):
    RESOLVED = "resolved"
    BROKEN = "broken"


class PairingStatus(str, Enum):
    PAIRED = "paired"
    UNPAIRED = "unpaired"


@dataclass(frozen=True, slots=True)
class Document:
    """One Markdown file found under the scan root.

    ``path`` is POSIX-style and relative to the root; it identifies the
    document across the whole run.
    """

    path: str
    title: str
    series: str
    language_variant: LanguageVariant
    base_stem: str
    outbound_links: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path)


@dataclass(frozen=True, slots=True)
class Link:
    """Reference from a document to another path in the tree."""

    source_path: str
    raw_target: str
    resolved_path: str
    status: LinkStatus

    @property
    def is_broken(self) -> bool:
        return self.status is LinkStatus.BROKEN


@dataclass(frozen=True, slots=True)
class VariantPairing:
    path: str
    variant: LanguageVariant
    counterpart_path: Optional[str]
    status: PairingStatus


@dataclass(frozen=True, slots=True)
class SeriesIndex:
    """Ordered documents of one series (directory)."""

    name: str
    documents: Tuple[Document, ...]

    def titles(self) -> list[str]:
        return [document.title for document in self.documents]


@dataclass(frozen=True, slots=True)
class SkippedFile:
    path: str
    reason: str
