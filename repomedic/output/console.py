"""Console renderer writing coloured plain text via click."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import click

from repomedic.models.report import (
    ReportDocument,
    ReportKeyValueList,
    ReportList,
    ReportParagraph,
    ReportSection,
    ReportTable,
    TextStyle,
)
from repomedic.output.base import BANNER_TAGLINE, BANNER_TITLE, element_type_name

_STYLE_KWARGS: dict[TextStyle, dict] = {
    TextStyle.BOLD: {"bold": True},
    TextStyle.ITALIC: {"italic": True},
    TextStyle.CODE: {"fg": "cyan"},
    TextStyle.SUCCESS: {"fg": "green"},
    TextStyle.WARNING: {"fg": "yellow"},
    TextStyle.ERROR: {"fg": "red", "bold": True},
    TextStyle.INFO: {"fg": "blue"},
    TextStyle.DIM: {"dim": True},
}


def styled(text: str, style: TextStyle) -> str:
    return click.style(text, **_STYLE_KWARGS.get(style, {}))


class ConsoleRenderer:
    """Human-readable terminal output.

    Colour codes are stripped by click when the stream is not a terminal.
    """

    def __init__(self, stream: TextIO, status_stream: TextIO | None = None) -> None:
        self.stream = stream
        self._status = status_stream or sys.stderr

    def _echo(self, text: str = "") -> None:
        click.echo(text, file=self.stream)

    def render_banner(self, subtitle: str = "") -> None:
        self._echo(click.style(BANNER_TITLE, fg="cyan", bold=True))
        self._echo(click.style(BANNER_TAGLINE, dim=True))
        if subtitle.strip():
            self._echo(click.style(subtitle, dim=True))
        self._echo()

    def render_error(self, message: str) -> None:
        self._echo(click.style(f"✗ Error: {message}", fg="red", bold=True))

    def render_info(self, message: str) -> None:
        self._echo(click.style(f"ℹ {message}", fg="blue"))

    def render_section_header(self, title: str) -> None:
        self._echo(click.style(title, bold=True, underline=True))
        self._echo()

    def render_footer(self, footer: str) -> None:
        if footer.strip():
            self._echo(click.style("─" * 40, dim=True))
            self._echo(footer)

    @contextmanager
    def wait(self, message: str) -> Iterator[None]:
        """Print a status line to stderr around a long-running block."""
        click.echo(click.style(f"⏳ {message}", dim=True), file=self._status)
        started = time.monotonic()
        yield
        elapsed = time.monotonic() - started
        click.echo(click.style(f"✓ done in {elapsed:.1f}s", dim=True), file=self._status)

    def render_report(self, report: ReportDocument) -> None:
        if report.title:
            self._echo(click.style(report.title, fg="cyan", bold=True))
        for key, value in report.metadata.items():
            self._echo(click.style(f"{key}: {value}", dim=True))
        self._echo()
        for section in report.sections:
            self._section(section, indent=0)

    def _section(self, section: ReportSection, indent: int) -> None:
        pad = "  " * indent
        if section.title.strip():
            heading = section.title if section.level > 1 else section.title.upper()
            self._echo(pad + click.style(heading, bold=True, fg="magenta" if section.level == 1 else None))
            if section.level == 1:
                self._echo(pad + click.style("═" * len(section.title), fg="magenta"))
        for element in section.elements:
            self._element(element, indent + (1 if section.level > 1 else 0))
        self._echo()

    def _element(self, element: object, indent: int) -> None:
        pad = "  " * indent
        if isinstance(element, ReportSection):
            self._section(element, indent)
        elif isinstance(element, ReportParagraph):
            self._echo(pad + styled(element.text, element.style))
            self._echo()
        elif isinstance(element, ReportTable):
            self._table(element, pad)
        elif isinstance(element, ReportKeyValueList):
            self._title(element.title, pad)
            width = max((len(item.key) for item in element.items), default=0)
            for item in element.items:
                key = click.style(f"{item.key}:".ljust(width + 1), bold=True)
                self._echo(f"{pad}{key} {styled(item.value, item.value_style)}")
            self._echo()
        elif isinstance(element, ReportList):
            self._title(element.title, pad)
            for index, item in enumerate(element.items, start=1):
                bullet = f"{index}." if element.is_ordered else "•"
                self._echo(f"{pad}  {bullet} {item}")
            self._echo()
        else:
            self._echo(pad + click.style(f"[unsupported element: {element_type_name(element)}]", dim=True))

    def _title(self, title: str, pad: str) -> None:
        if title.strip():
            self._echo(pad + click.style(title, bold=True))

    def _table(self, table: ReportTable, pad: str) -> None:
        self._title(table.title, pad)
        if not table.headers:
            return
        columns = max([len(table.headers)] + [len(row) for row in table.rows])
        widths = [0] * columns
        for row in [table.headers, *table.rows]:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))

        def _line(cells: list[str]) -> str:
            return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

        self._echo(pad + click.style(_line(table.headers), bold=True))
        self._echo(pad + click.style("  ".join("─" * w for w in widths[: len(table.headers)]), dim=True))
        for row in table.rows:
            self._echo(pad + _line(row))
        self._echo()
