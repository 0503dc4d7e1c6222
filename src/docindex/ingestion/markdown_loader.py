"""Markdown loading utilities.

Turns one file on disk into a :class:`~docindex.models.Document`: decodes it,
finds its title, works out its series and language variant and records the
raw link targets in reading order.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional, Tuple

from docindex.errors import UnreadableFileError
from docindex.index.links import iter_link_targets
from docindex.models import Document, LanguageVariant
from docindex.utils.files import relative_posix
from docindex.utils.text import iter_prose_lines, normalize_whitespace

LOGGER = logging.getLogger(__name__)

ROOT_SERIES = "."

_HEADING = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_FRONT_MATTER = re.compile(r"\A---[ \t]*\n.*?\n(?:---|\.\.\.)[ \t]*(?:\n|\Z)", re.S)


def read_document_text(path: Path) -> str:
    """Read ``path`` as strict UTF-8, raising :class:`UnreadableFileError` on failure."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise UnreadableFileError(path, exc.strerror or str(exc)) from exc
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnreadableFileError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


def iter_headings(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(level, title)`` for ATX and setext headings outside code fences.

    A leading YAML front matter block is ignored. A setext underline only
    counts when it directly follows a non-blank text line.
    """
    previous: Optional[str] = None
    for line in iter_prose_lines(_FRONT_MATTER.sub("", text, count=1)):
        match = _HEADING.match(line)
        if match:
            previous = None
            yield len(match.group(1)), match.group(2)
            continue
        underline = _SETEXT_UNDERLINE.match(line)
        if underline and previous is not None:
            yield (1 if underline.group(1)[0] == "=" else 2), previous
            previous = None
            continue
        previous = line if line.strip() else None


def extract_title(text: str, fallback: str) -> str:
    """First level-1 heading, else the first heading of any level, else ``fallback``."""
    first_any: Optional[str] = None
    for level, raw_title in iter_headings(text):
        title = normalize_whitespace([raw_title])
        if not title:
            continue
        if level == 1:
            return title
        if first_any is None:
            first_any = title
    return first_any if first_any is not None else fallback


def detect_variant(stem: str, variant_suffix: str) -> Tuple[LanguageVariant, str]:
    """Return the language variant of a file stem and the stem without the marker."""
    if stem.endswith(variant_suffix) and len(stem) > len(variant_suffix):
        return LanguageVariant.CN, stem[: -len(variant_suffix)]
    return LanguageVariant.BASE, stem


def series_of(relative_path: str) -> str:
    parent = PurePosixPath(relative_path).parent
    return parent.name if parent.parts else ROOT_SERIES


def load_document(path: Path, root: Path, *, variant_suffix: str) -> Document:
    """Build a :class:`Document` for ``path``, which must live under ``root``."""
    text = read_document_text(path)
    relative = relative_posix(path, root)
    variant, base_stem = detect_variant(path.stem, variant_suffix)
    document = Document(
        path=relative,
        title=extract_title(text, path.stem),
        series=series_of(relative),
        language_variant=variant,
        base_stem=base_stem,
        outbound_links=tuple(iter_link_targets(text)),
    )
    LOGGER.debug("Loaded %s (%s, %d links)", relative, variant.value, len(document.outbound_links))
    return document
