"""Command-line interface: run one extraction and print the roster."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_settings
from .engine import RosterEngine
from .models import ExtractionReport
from .service import count_by_party
from .source import LocalFileSource

console = Console()


def _render_table(report: ExtractionReport) -> Table:
    table = Table(title=f"Senators ({len(report.records)}, source: {report.source})")
    table.add_column("Name")
    table.add_column("State")
    table.add_column("Party")
    table.add_column("Assumed office")
    for r in report.records:
        table.add_row(r.name, r.state, r.party.value, r.office_start_date)
    return table


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        prog="senate-roster",
        description="Extract the current senators roster from its source page.",
    )
    parser.add_argument(
        "--url",
        default=settings.source_url,
        help="Page to scrape (default: %(default)s)",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Parse a saved HTML file instead of fetching --url",
    )
    parser.add_argument(
        "--min-records",
        type=int,
        default=settings.min_plausible_records,
        help="Run link recovery below this many table rows (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of a table",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Also write the JSON roster to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging (per-row decisions)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%H:%M:%S",
    )

    settings = dataclasses.replace(
        settings,
        source_url=args.url,
        min_plausible_records=args.min_records,
    )
    source = LocalFileSource(args.file) if args.file else None
    report = RosterEngine(settings=settings, source=source).extract()

    payload = {
        "count": len(report.records),
        "data": [r.to_dict() for r in report.records],
        "breakdown": count_by_party(report.records),
        "diagnostics": report.summary(),
    }

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        console.print(f"[dim]Wrote {args.output}[/]")

    if args.json:
        console.print_json(json.dumps(payload))
    else:
        console.print(_render_table(report))
        breakdown = ", ".join(f"{k}: {v}" for k, v in payload["breakdown"].items())
        console.print(f"[bold]Parties[/] {breakdown}")
        if report.used_fallback:
            console.print(f"[yellow]Fallback roster used:[/] {escape(report.error)}")

    return 1 if report.used_fallback else 0
