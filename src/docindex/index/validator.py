"""Cross-reference validation: link status, variant pairing and orphans."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from docindex.index.links import LinkReference, extract_links
from docindex.models import (
    Document,
    LanguageVariant,
    Link,
    LinkStatus,
    PairingStatus,
    VariantPairing,
)

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidationResult:
    links: list[Link] = field(default_factory=list)
    pairings: list[VariantPairing] = field(default_factory=list)
    orphans: list[Document] = field(default_factory=list)

    @property
    def broken_links(self) -> list[Link]:
        return [link for link in self.links if link.is_broken]

    @property
    def unpaired(self) -> list[VariantPairing]:
        return [pairing for pairing in self.pairings if pairing.status is PairingStatus.UNPAIRED]


def validate_links(
    documents: Sequence[Document], references: Iterable[LinkReference]
) -> list[Link]:
    """Mark each reference Resolved when it names a known document path exactly."""
    known = {document.path for document in documents}
    links = []
    for reference in references:
        status = LinkStatus.RESOLVED if reference.resolved_path in known else LinkStatus.BROKEN
        if status is LinkStatus.BROKEN:
            LOGGER.debug("Broken link in %s: %s", reference.source_path, reference.raw_target)
        links.append(
            Link(
                source_path=reference.source_path,
                raw_target=reference.raw_target,
                resolved_path=reference.resolved_path,
                status=status,
            )
        )
    return links


def check_variant_pairs(documents: Sequence[Document], variant_suffix: str) -> list[VariantPairing]:
    """Pair every document with its other-language sibling in the same directory."""
    by_path = {document.path: document for document in documents}
    pairings = []
    for document in documents:
        expected = posixpath.join(document.directory, sibling_variant_name(document, variant_suffix))
        counterpart = by_path.get(expected)
        if counterpart is not None and counterpart.language_variant is document.language_variant:
            counterpart = None
        pairings.append(
            VariantPairing(
                path=document.path,
                variant=document.language_variant,
                counterpart_path=counterpart.path if counterpart else None,
                status=PairingStatus.PAIRED if counterpart else PairingStatus.UNPAIRED,
            )
        )
    return pairings


def find_orphans(
    documents: Sequence[Document], links: Iterable[Link], *, entry_stems: Iterable[str] = ()
) -> list[Document]:
    """Documents no other document links to, entry pages excepted."""
    entries = {stem.casefold() for stem in entry_stems}
    linked = {
        link.resolved_path
        for link in links
        if not link.is_broken and link.resolved_path != link.source_path
    }
    return [
        document
        for document in documents
        if document.path not in linked and document.base_stem.casefold() not in entries
    ]


class Validator:
    """Runs all cross-reference checks over one scan."""

    def __init__(self, *, variant_suffix: str, entry_stems: Iterable[str] = ()) -> None:
        self.variant_suffix = variant_suffix
        self.entry_stems = tuple(entry_stems)

    def validate(self, documents: Sequence[Document]) -> ValidationResult:
        references = [reference for document in documents for reference in extract_links(document)]
        links = validate_links(documents, references)
        result = ValidationResult(
            links=links,
            pairings=check_variant_pairs(documents, self.variant_suffix),
            orphans=find_orphans(documents, links, entry_stems=self.entry_stems),
        )
        LOGGER.info(
            "Validated %d links: %d broken, %d unpaired variants, %d orphans",
            len(result.links),
            len(result.broken_links),
            len(result.unpaired),
            len(result.orphans),
        )
        return result


def sibling_variant_name(document: Document, variant_suffix: str) -> str:
    """File name the other-language counterpart of ``document`` would have."""
    ext = posixpath.splitext(document.name)[1]
    if document.language_variant is LanguageVariant.BASE:
        return f"{document.base_stem}{variant_suffix}{ext}"
    return f"{document.base_stem}{ext}"
