"""Renderer-agnostic report document model.

A :class:`ReportDocument` is an ordered tree: the document holds sections,
a section holds elements, and a section is itself an element so sections
nest.  Renderers walk the tree in insertion order and dispatch on the
concrete element class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TextStyle(Enum):
    """Presentation hint; each renderer maps it to its own markup."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"
    DIM = "dim"


@dataclass
class ReportParagraph:
    text: str = ""
    style: TextStyle = TextStyle.NORMAL


@dataclass
class ReportTable:
    """Headers and rows of string cells.  Row lengths are not validated."""

    title: str = ""
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def add_row(self, *cells: str) -> None:
        self.rows.append(list(cells))


@dataclass
class KeyValueItem:
    key: str
    value: str
    value_style: TextStyle = TextStyle.NORMAL


@dataclass
class ReportKeyValueList:
    title: str = ""
    items: list[KeyValueItem] = field(default_factory=list)

    def add(self, key: str, value: str, style: TextStyle = TextStyle.NORMAL) -> None:
        self.items.append(KeyValueItem(key, value, style))


@dataclass
class ReportList:
    title: str = ""
    items: list[str] = field(default_factory=list)
    is_ordered: bool = False

    def add_item(self, item: str) -> None:
        self.items.append(item)


@dataclass
class ReportSection:
    """A titled group of elements.  Rendered heading depth is ``level + 1``."""

    title: str = ""
    level: int = 1
    elements: list[ReportElement] = field(default_factory=list)

    def add_element(self, element: ReportElement) -> None:
        self.elements.append(element)


ReportElement = Union[
    ReportParagraph, ReportTable, ReportKeyValueList, ReportList, ReportSection
]


@dataclass
class ReportDocument:
    title: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    sections: list[ReportSection] = field(default_factory=list)

    def add_section(self, section: ReportSection) -> None:
        self.sections.append(section)
