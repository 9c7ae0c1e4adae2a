"""Renderer interface and format lookup."""

from __future__ import annotations

import sys
from contextlib import AbstractContextManager
from typing import Protocol, TextIO, runtime_checkable

from repomedic.exceptions import RendererNotFoundError
from repomedic.models.report import ReportDocument

BANNER_TITLE = "repomedic"
BANNER_TAGLINE = ".NET Repository Health Analysis Tool"


@runtime_checkable
class Renderer(Protocol):
    """Interface that every output renderer must satisfy.

    Renderers write to the stream they were built with and keep no state
    between calls.
    """

    stream: TextIO

    def render_banner(self, subtitle: str = "") -> None: ...

    def render_error(self, message: str) -> None: ...

    def render_info(self, message: str) -> None: ...

    def render_section_header(self, title: str) -> None: ...

    def render_footer(self, footer: str) -> None: ...

    def render_report(self, report: ReportDocument) -> None: ...

    def wait(self, message: str) -> AbstractContextManager[None]: ...


FORMAT_ALIASES = {
    "console": "console",
    "markdown": "markdown",
    "md": "markdown",
    "json": "json",
    "jsonl": "json",
}


def create_renderer(output_format: str, stream: TextIO | None = None) -> Renderer:
    """Return the renderer for *output_format* writing to *stream* (stdout by default)."""
    from repomedic.output.console import ConsoleRenderer
    from repomedic.output.json_lines import JsonLinesRenderer
    from repomedic.output.markdown import MarkdownRenderer

    canonical = FORMAT_ALIASES.get(output_format.lower())
    if canonical is None:
        raise RendererNotFoundError(
            f"Unknown output format '{output_format}'. "
            f"Choose one of: {', '.join(sorted(FORMAT_ALIASES))}"
        )
    target = stream if stream is not None else sys.stdout
    if canonical == "markdown":
        return MarkdownRenderer(target)
    if canonical == "json":
        return JsonLinesRenderer(target)
    return ConsoleRenderer(target)


def element_type_name(element: object) -> str:
    return type(element).__name__
