"""JSON-lines renderer for machine consumers and MCP tool output.

Every call writes exactly one JSON object on its own line, discriminated
by a ``type`` key.  Inside a report, every element carries a ``$type`` key
with its concrete class name.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from repomedic.models.report import (
    KeyValueItem,
    ReportDocument,
    ReportKeyValueList,
    ReportList,
    ReportParagraph,
    ReportSection,
    ReportTable,
)
from repomedic.output.base import BANNER_TITLE, element_type_name


def element_to_dict(element: object) -> dict[str, Any]:
    """Serialise one report element with its ``$type`` tag."""
    data: dict[str, Any] = {"$type": element_type_name(element)}
    if isinstance(element, ReportSection):
        data.update(
            title=element.title,
            level=element.level,
            elements=[element_to_dict(e) for e in element.elements],
        )
    elif isinstance(element, ReportParagraph):
        data.update(text=element.text, style=element.style.value)
    elif isinstance(element, ReportTable):
        data.update(
            title=element.title,
            headers=list(element.headers),
            rows=[list(row) for row in element.rows],
        )
    elif isinstance(element, ReportKeyValueList):
        data.update(title=element.title, items=[_item_to_dict(i) for i in element.items])
    elif isinstance(element, ReportList):
        data.update(title=element.title, items=list(element.items), isOrdered=element.is_ordered)
    else:
        data["unsupported"] = True
    return data


def _item_to_dict(item: KeyValueItem) -> dict[str, str]:
    return {"key": item.key, "value": item.value, "valueStyle": item.value_style.value}


def document_to_dict(report: ReportDocument) -> dict[str, Any]:
    return {
        "title": report.title,
        "metadata": dict(report.metadata),
        "sections": [element_to_dict(s) for s in report.sections],
    }


class JsonLinesRenderer:
    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def _emit(self, payload: dict[str, Any]) -> None:
        self.stream.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self.stream.flush()

    def render_banner(self, subtitle: str = "") -> None:
        self._emit({"type": "banner", "title": BANNER_TITLE, "subtitle": subtitle})

    def render_error(self, message: str) -> None:
        self._emit({"type": "error", "message": message})

    def render_info(self, message: str) -> None:
        self._emit({"type": "info", "message": message})

    def render_section_header(self, title: str) -> None:
        self._emit({"type": "section_header", "title": title})

    def render_footer(self, footer: str) -> None:
        self._emit({"type": "footer", "content": footer})

    @contextmanager
    def wait(self, message: str) -> Iterator[None]:
        yield

    def render_report(self, report: ReportDocument) -> None:
        self._emit({"type": "report", "data": document_to_dict(report)})
