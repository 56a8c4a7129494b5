"""Extraction pipeline: fetch → locate table → resolve columns → extract rows.

:meth:`RosterEngine.extract` never raises.  Any failure while fetching or
parsing is logged and answered with the fixed fallback roster.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .config import Settings
from .extractor import extract_roster
from .fallback import fallback_roster
from .locator import TableStrategy, default_strategies, locate_roster_table
from .models import ExtractionReport
from .source import PageFetcher, parse_document

LOGGER = logging.getLogger(__name__)


class DocumentSource(Protocol):
    def fetch(self, url: str) -> str: ...


@dataclass
class RosterEngine:
    settings: Settings = field(default_factory=Settings)
    source: DocumentSource | None = None
    strategies: Sequence[TableStrategy] | None = None

    def __post_init__(self) -> None:
        if self.source is None:
            self.source = PageFetcher(
                user_agent=self.settings.user_agent,
                timeout_seconds=self.settings.request_timeout,
            )
        if self.strategies is None:
            self.strategies = default_strategies(self.settings.table_marker)

    def run(self) -> ExtractionReport:
        """Run the live pipeline once.  Raises on fetch/structure failure."""
        LOGGER.info("Fetching fresh data from %s ...", self.settings.source_url)
        markup = self.source.fetch(self.settings.source_url)
        soup = parse_document(markup)
        table, strategy_name = locate_roster_table(soup, self.strategies)
        report = extract_roster(
            soup,
            table,
            min_plausible_records=self.settings.min_plausible_records,
            default_date=self.settings.default_office_date,
        )
        report.table_strategy = strategy_name
        return report

    def extract(self) -> ExtractionReport:
        """Run the pipeline, substituting the fallback roster on any error."""
        try:
            return self.run()
        except Exception as exc:
            LOGGER.exception("Error fetching senator data; serving fallback roster.")
            return ExtractionReport(
                records=fallback_roster(),
                source="fallback",
                error=str(exc) or exc.__class__.__name__,
            )
