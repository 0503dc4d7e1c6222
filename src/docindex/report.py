"""Report model and renderers (rich text, JSON, Markdown table of contents)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from docindex.models import (
    Document,
    Link,
    PairingStatus,
    SeriesIndex,
    SkippedFile,
    VariantPairing,
)

EXIT_OK = 0
EXIT_BROKEN_LINKS = 1
EXIT_FATAL = 2


@dataclass(slots=True)
class Report:
    """Everything one run found. Rendering it never touches the filesystem."""

    documents: list[Document] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    pairings: list[VariantPairing] = field(default_factory=list)
    orphans: list[Document] = field(default_factory=list)
    series: list[SeriesIndex] = field(default_factory=list)

    @property
    def broken_links(self) -> list[Link]:
        return [link for link in self.links if link.is_broken]

    @property
    def unpaired(self) -> list[VariantPairing]:
        return [pairing for pairing in self.pairings if pairing.status is PairingStatus.UNPAIRED]

    @property
    def exit_code(self) -> int:
        return EXIT_BROKEN_LINKS if self.broken_links else EXIT_OK


def report_to_dict(report: Report) -> Dict[str, Any]:
    broken = report.broken_links
    unpaired = report.unpaired
    return {
        "documents_scanned": len(report.documents),
        "links_checked": len(report.links),
        "broken_links": {
            "count": len(broken),
            "items": [
                {
                    "source": link.source_path,
                    "target": link.raw_target,
                    "resolved": link.resolved_path,
                }
                for link in broken
            ],
        },
        "unpaired_variants": {
            "count": len(unpaired),
            "items": [{"path": pairing.path, "variant": pairing.variant.value} for pairing in unpaired],
        },
        "orphans": [document.path for document in report.orphans],
        "skipped_files": [{"path": item.path, "reason": item.reason} for item in report.skipped],
        "series": {
            index.name: [
                {"path": document.path, "title": document.title} for document in index.documents
            ]
            for index in report.series
        },
    }


def render_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2, sort_keys=True, ensure_ascii=False)


def render_text(report: Report, console: Console) -> None:
    """Print a human-readable report."""
    broken = report.broken_links
    unpaired = report.unpaired

    console.print(f"Documents scanned: [bold]{len(report.documents)}[/bold]")
    console.print(f"Links checked: {len(report.links)}")
    console.print(f"Broken links: [bold]{len(broken)}[/bold]")
    console.print(f"Unpaired variants: {len(unpaired)}")
    console.print(f"Orphaned documents: {len(report.orphans)}")
    console.print(f"Skipped files: {len(report.skipped)}")

    if broken:
        table = Table(title="Broken links", show_header=True, header_style="bold red")
        table.add_column("Source")
        table.add_column("Target")
        table.add_column("Resolved")
        for link in broken:
            table.add_row(Text(link.source_path), Text(link.raw_target), Text(link.resolved_path))
        console.print(table)

    if unpaired:
        table = Table(title="Unpaired variants", show_header=True, header_style="bold yellow")
        table.add_column("Document")
        table.add_column("Variant")
        for pairing in unpaired:
            table.add_row(Text(pairing.path), pairing.variant.value)
        console.print(table)

    if report.orphans:
        console.print("[yellow]Orphaned documents:[/yellow]")
        for document in report.orphans:
            console.print(f"  {escape(document.path)}", emoji=False)

    if report.skipped:
        console.print("[yellow]Skipped files:[/yellow]")
        for item in report.skipped:
            console.print(f"  {escape(item.path)}: {escape(item.reason)}", emoji=False)

    console.print("[bold magenta]Series index[/bold magenta]")
    for index in report.series:
        console.print(f"[bold]{escape(index.name)}[/bold]", emoji=False)
        for position, document in enumerate(index.documents, start=1):
            console.print(f"  {position}. {escape(document.title)}", emoji=False)


def render_markdown_toc(series: Iterable[SeriesIndex], *, heading: Optional[str] = None) -> str:
    """Render series as a Markdown table of contents with root-relative links."""
    lines: list[str] = []
    if heading:
        lines.extend([f"# {heading}", ""])
    for index in series:
        lines.extend([f"## {index.name}", ""])
        for position, document in enumerate(index.documents, start=1):
            target = document.path.replace(" ", "%20")
            lines.append(f"{position}. [{document.title}]({target})")
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"
