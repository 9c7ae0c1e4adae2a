"""Markdown renderer."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

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

_STYLE_FORMATS: dict[TextStyle, str] = {
    TextStyle.BOLD: "**{}**",
    TextStyle.ITALIC: "*{}*",
    TextStyle.CODE: "`{}`",
    TextStyle.SUCCESS: "✅ {}",
    TextStyle.WARNING: "⚠️ {}",
    TextStyle.ERROR: "❌ {}",
    TextStyle.INFO: "ℹ️ {}",
    TextStyle.DIM: "*{}*",
}


def apply_style(text: str, style: TextStyle) -> str:
    return _STYLE_FORMATS.get(style, "{}").format(text)


def escape_cell(text: str) -> str:
    """Make *text* safe inside a table cell."""
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\r\n", " ").replace("\n", " ")


class MarkdownRenderer:
    """Render reports as GitHub-flavoured markdown.

    Each call builds its output in a local buffer and writes it in one go,
    so rendering the same document twice yields identical text.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def _write(self, lines: list[str]) -> None:
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    def render_banner(self, subtitle: str = "") -> None:
        lines = [f"# {BANNER_TITLE}", "", f"*{BANNER_TAGLINE}*", ""]
        if subtitle.strip():
            lines += [f"*{subtitle}*", ""]
        self._write(lines)

    def render_error(self, message: str) -> None:
        self._write([f"**❌ Error:** {message}", ""])

    def render_info(self, message: str) -> None:
        self._write([f"**ℹ️ Info:** {message}", ""])

    def render_section_header(self, title: str) -> None:
        self._write([f"## {title}", ""])

    def render_footer(self, footer: str) -> None:
        if footer.strip():
            self._write(["---", "", footer, ""])

    @contextmanager
    def wait(self, message: str) -> Iterator[None]:
        yield

    def render_report(self, report: ReportDocument) -> None:
        lines: list[str] = []
        if report.metadata:
            lines.append("---")
            lines.extend(f"{key}: {value}" for key, value in report.metadata.items())
            lines += ["---", ""]
        for section in report.sections:
            self._section(section, lines)
        self._write(lines)

    def _section(self, section: ReportSection, lines: list[str]) -> None:
        if section.title.strip():
            # +1 because the banner owns the top-level heading
            lines += [f"{'#' * (section.level + 1)} {section.title}", ""]
        for element in section.elements:
            self._element(element, lines)

    def _element(self, element: object, lines: list[str]) -> None:
        if isinstance(element, ReportSection):
            self._section(element, lines)
        elif isinstance(element, ReportParagraph):
            lines += [apply_style(element.text, element.style), ""]
        elif isinstance(element, ReportTable):
            self._table(element, lines)
        elif isinstance(element, ReportKeyValueList):
            self._title(element.title, lines)
            for item in element.items:
                lines.append(f"- **{item.key}:** {apply_style(item.value, item.value_style)}")
            lines.append("")
        elif isinstance(element, ReportList):
            self._title(element.title, lines)
            for index, item in enumerate(element.items, start=1):
                lines.append(f"{index}. {item}" if element.is_ordered else f"- {item}")
            lines.append("")
        else:
            lines += [f"*Unsupported element type: {element_type_name(element)}*", ""]

    @staticmethod
    def _title(title: str, lines: list[str]) -> None:
        if title.strip():
            lines += [f"**{title}**", ""]

    def _table(self, table: ReportTable, lines: list[str]) -> None:
        self._title(table.title, lines)
        if not table.headers or not table.rows:
            return
        lines.append("| " + " | ".join(escape_cell(h) for h in table.headers) + " |")
        lines.append("| " + " | ".join("---" for _ in table.headers) + " |")
        for row in table.rows:
            lines.append("| " + " | ".join(escape_cell(cell) for cell in row) + " |")
        lines.append("")
