"""Console and JSON reporting for crawl results."""

import json
import sys
import time
from typing import Callable, List, Optional, TextIO

from doclinks.constants import (
    PROGRESS_INTERVAL_SECONDS,
    TABLE_LINK_WIDTH,
    TABLE_REASON_WIDTH,
    TABLE_SOURCE_WIDTH,
)
from doclinks.models import CrawlEvent, CrawlReport, EventType

TABLE_WIDTH = TABLE_SOURCE_WIDTH + TABLE_LINK_WIDTH + TABLE_REASON_WIDTH + 10


def _cell(value: str, width: int) -> str:
    return value.ljust(width)[:width]


class ConsoleReporter:
    """Prints crawl progress and the final broken-link table.

    Attach it to an engine before running; everything it prints is driven by
    engine events.
    """

    def __init__(
        self,
        start_url: str,
        verbose: bool = False,
        debug: bool = False,
        stream: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the reporter.

        Args:
            start_url: Seed URL, stripped from displayed URLs
            verbose: Print each broken link as soon as it is found
            debug: Debug mode (implies verbose output, no progress dots)
            stream: Output stream (stdout if None)
            clock: Monotonic clock, injectable for tests
        """
        self.start_url = start_url
        self.verbose = verbose
        self.debug = debug
        self.stream = stream or sys.stdout
        self._clock = clock
        self._started = clock()
        self._last_progress = self._started
        self.pages_processed = 0

    @property
    def detailed(self) -> bool:
        return self.verbose or self.debug

    def attach(self, engine, summary: bool = True) -> None:
        """Subscribe to an engine's events.

        Args:
            engine: CrawlEngine to observe
            summary: Print the summary table when the crawl completes
        """
        engine.subscribe(EventType.PAGE_STARTED, self.on_page_started)
        engine.subscribe(EventType.LINK_BROKEN, self.on_link_broken)
        engine.subscribe(EventType.PAGE_VISITED, self.on_page_visited)
        if summary:
            engine.subscribe(EventType.CRAWL_COMPLETE, self.on_crawl_complete)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def relative(self, url: str) -> str:
        return url.replace(self.start_url, "", 1)

    def print_header(self) -> None:
        self._print("Starting website crawler for broken links...")
        self._print(f"Start URL: {self.start_url}")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_page_started(self, event: CrawlEvent) -> None:
        self.pages_processed += 1

        now = self._clock()
        if now - self._last_progress > PROGRESS_INTERVAL_SECONDS:
            elapsed = now - self._started
            self._write(
                f"\rPages: {self.pages_processed} | Queue: {event.queue_length} | Time: {elapsed:.0f}s"
            )
            self._last_progress = now

        if not self.detailed:
            self._write(f"Scanning: {self.relative(event.url)}\r")

    def on_link_broken(self, event: CrawlEvent) -> None:
        if not self.detailed:
            return

        record = event.broken_link
        self._print(f"\nBROKEN LINK on {record.source_page}")
        self._print(f"  → {record.url}")
        self._print(f"  → Reason: {record.reason}")
        if record.text:
            self._print(f'  → Text: "{record.text}"')

    def on_page_visited(self, event: CrawlEvent) -> None:
        if event.broken:
            if self.detailed:
                self._print(f"\nFound {len(event.broken)} broken links on {event.url}")
            else:
                self._write("×")
        elif not self.detailed:
            self._write(".")

    def on_crawl_complete(self, event: CrawlEvent) -> None:
        self.print_summary(event.report)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def format_table(self, report: CrawlReport) -> List[str]:
        """Render broken links as box-drawn table lines, sorted by source page."""
        lines = [
            "┌" + "─" * (TABLE_WIDTH - 2) + "┐",
            f"│ {_cell('SOURCE PAGE', TABLE_SOURCE_WIDTH)} │ "
            f"{_cell('BROKEN LINK', TABLE_LINK_WIDTH)} │ "
            f"{_cell('REASON', TABLE_REASON_WIDTH)} │",
            "├" + "─" * (TABLE_WIDTH - 2) + "┤",
        ]

        last_source = None
        for record in report.sorted_broken_links():
            source = "" if record.source_page == last_source else self.relative(record.source_page)
            last_source = record.source_page

            lines.append(
                f"│ {_cell(source, TABLE_SOURCE_WIDTH)} │ "
                f"{_cell(self.relative(record.url), TABLE_LINK_WIDTH)} │ "
                f"{_cell(record.reason, TABLE_REASON_WIDTH)} │"
            )

        lines.append("└" + "─" * (TABLE_WIDTH - 2) + "┘")
        return lines

    def print_summary(self, report: CrawlReport) -> None:
        summary = report.summary

        self._print("\n\nSummary:")
        self._print(
            f"Visited {summary.pages_visited} unique pages in {summary.duration_seconds:.1f} seconds"
        )

        if report.seed_failed:
            self._print(f"Warning: could not retrieve the start URL {report.start_url}")

        if summary.total_broken == 0:
            self._print("No broken links found.")
            return

        self._print(
            f"\nFound {summary.total_broken} broken links on {summary.pages_with_broken} pages:\n"
        )
        for line in self.format_table(report):
            self._print(line)


def report_to_json(report: CrawlReport) -> str:
    """Serialize a report (summary plus source-sorted broken links) to JSON."""
    return json.dumps(report.to_dict(), indent=2, default=str)


def write_json_report(report: CrawlReport, output_file: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Write the JSON report to a file, or to the stream when no file is given."""
    output = report_to_json(report)
    stream = stream or sys.stdout
    if output_file:
        with open(output_file, "w") as f:
            f.write(output)
        print(f"\nResults written to {output_file}", file=stream)
    else:
        print(output, file=stream)
