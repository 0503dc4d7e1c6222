"""Scan, validate and report in one linear pass."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from docindex.config import AppConfig
from docindex.errors import RootDirectoryError
from docindex.index.scanner import Scanner
from docindex.index.series import build_series_index
from docindex.index.validator import Validator
from docindex.report import Report

LOGGER = logging.getLogger(__name__)


class PipelineState(str, Enum):
    NOT_STARTED = "not_started"
    SCANNING = "scanning"
    VALIDATING = "validating"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


class Pipeline:
    """Single-use run over one content tree.

    States only move forward; a missing root goes straight to ``FAILED``.
    """

    def __init__(self, root: Path, config: Optional[AppConfig] = None) -> None:
        self.root = Path(root)
        self.config = config or AppConfig()
        self.state = PipelineState.NOT_STARTED

    def _transition(self, state: PipelineState) -> None:
        LOGGER.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> Report:
        if self.state is not PipelineState.NOT_STARTED:
            raise RuntimeError(f"Pipeline cannot run from state {self.state.value}")

        scanner = Scanner.from_config(self.root, self.config)
        try:
            scanner.check_root()
        except RootDirectoryError:
            self._transition(PipelineState.FAILED)
            raise

        self._transition(PipelineState.SCANNING)
        scan = scanner.scan()
        LOGGER.info("Scanned %d documents, skipped %d", len(scan.documents), len(scan.skipped))

        self._transition(PipelineState.VALIDATING)
        validator = Validator(
            variant_suffix=self.config.variant_suffix, entry_stems=self.config.entry_stems
        )
        validation = validator.validate(scan.documents)

        self._transition(PipelineState.REPORTING)
        report = Report(
            documents=scan.documents,
            skipped=scan.skipped,
            links=validation.links,
            pairings=validation.pairings,
            orphans=validation.orphans,
            series=build_series_index(scan.documents),
        )

        self._transition(PipelineState.DONE)
        return report


def run_pipeline(root: Path, config: Optional[AppConfig] = None) -> Report:
    return Pipeline(root, config).run()
