"""Series index construction."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Tuple

from docindex.models import Document, LanguageVariant, SeriesIndex
from docindex.utils.text import numeric_prefix


def document_sort_key(document: Document) -> Tuple[int, int, str, str]:
    """Numeric prefixes first in ascending value, then the rest, ties by file name."""
    prefix = numeric_prefix(document.name)
    if prefix is None:
        return (1, 0, document.name, document.path)
    return (0, prefix, document.name, document.path)


def build_series_index(
    documents: Iterable[Document], *, variant: Optional[LanguageVariant] = None
) -> list[SeriesIndex]:
    """Group documents by series, optionally keeping a single language variant.

    Series are returned sorted by name, so the result never depends on the
    order the documents were discovered in.
    """
    grouped: dict[str, list[Document]] = defaultdict(list)
    for document in documents:
        if variant is not None and document.language_variant is not variant:
            continue
        grouped[document.series].append(document)
    return [
        SeriesIndex(name=name, documents=tuple(sorted(grouped[name], key=document_sort_key)))
        for name in sorted(grouped)
    ]
