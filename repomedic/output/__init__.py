"""Output renderers: console, markdown and JSON lines."""

from repomedic.output.base import FORMAT_ALIASES, Renderer, create_renderer
from repomedic.output.console import ConsoleRenderer
from repomedic.output.json_lines import JsonLinesRenderer
from repomedic.output.markdown import MarkdownRenderer

__all__ = [
    "FORMAT_ALIASES",
    "ConsoleRenderer",
    "JsonLinesRenderer",
    "MarkdownRenderer",
    "Renderer",
    "create_renderer",
]
