"""Text helpers for Markdown sources."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

_FENCE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_NUMERIC_PREFIX = re.compile(r"^(\d+)")


def iter_prose_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` that sit outside fenced code blocks.

    A fence opened with backticks is only closed by backticks of at least the
    same length, and likewise for tildes. An unclosed fence swallows the rest
    of the document, as Markdown renderers do.
    """
    fence: Optional[str] = None
    for line in text.splitlines():
        match = _FENCE.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                continue
            yield line
        elif match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
            fence = None


def numeric_prefix(name: str) -> Optional[int]:
    """Leading integer of a file name such as ``02_Topic.md``, if any."""
    match = _NUMERIC_PREFIX.match(name)
    return int(match.group(1)) if match else None


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse runs of whitespace and join non-empty lines with spaces."""
    return " ".join(" ".join(line.split()) for line in lines if line.strip())
