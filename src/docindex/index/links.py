"""Markdown link extraction and relative path resolution."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from typing import Iterator
from urllib.parse import unquote

from docindex.models import Document
from docindex.utils.text import iter_prose_lines

# [label](target) or [label](target "title"); images are matched too so they can be dropped
_INLINE_LINK = re.compile(
    r"(!?)\[(?:[^\]\\]|\\.)*\]"
    r"\(\s*(<[^>\n]*>|(?:[^()\s]|\([^()\s]*\))*)(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)
_CODE_SPAN = re.compile(r"(`+).*?\1")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


@dataclass(frozen=True, slots=True)
class LinkReference:
    """A local link target resolved to a root-relative path, before validation."""

    source_path: str
    raw_target: str
    resolved_path: str


def iter_link_targets(text: str) -> Iterator[str]:
    """Yield raw inline link targets in reading order.

    Image links and anything inside fenced blocks or code spans are skipped.
    """
    for line in iter_prose_lines(text):
        line = _CODE_SPAN.sub("", line)
        for match in _INLINE_LINK.finditer(line):
            if match.group(1):
                continue
            target = match.group(2)
            if target.startswith("<") and target.endswith(">"):
                target = target[1:-1].strip()
            yield target


def is_external(target: str) -> bool:
    """True for targets with a URL scheme or a protocol-relative ``//host`` prefix."""
    return bool(_SCHEME.match(target)) or target.startswith("//")


def resolve_target(source_path: str, raw_target: str) -> str:
    """Resolve ``raw_target`` as written in ``source_path`` to a root-relative path.

    Anchors and query strings are dropped. An empty remainder points back to the
    source document. Leading ``/`` means the scan root.
    """
    target = raw_target.split("#", 1)[0].split("?", 1)[0]
    target = unquote(target).strip()
    if not target:
        return source_path
    if target.startswith("/"):
        joined = target.lstrip("/")
    else:
        joined = posixpath.join(posixpath.dirname(source_path), target)
    return posixpath.normpath(joined)


def extract_links(document: Document) -> Iterator[LinkReference]:
    """Yield the local links of ``document``, external URLs excluded."""
    for raw_target in document.outbound_links:
        if is_external(raw_target):
            continue
        yield LinkReference(
            source_path=document.path,
            raw_target=raw_target,
            resolved_path=resolve_target(document.path, raw_target),
        )
