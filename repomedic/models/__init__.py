"""Data models: project records and the renderer-agnostic report tree."""

from repomedic.models.project import (
    PackageDependency,
    ProjectRecord,
    ProjectReference,
    TransitiveDependency,
)
from repomedic.models.report import (
    KeyValueItem,
    ReportDocument,
    ReportElement,
    ReportKeyValueList,
    ReportList,
    ReportParagraph,
    ReportSection,
    ReportTable,
    TextStyle,
)

__all__ = [
    "KeyValueItem",
    "PackageDependency",
    "ProjectRecord",
    "ProjectReference",
    "ReportDocument",
    "ReportElement",
    "ReportKeyValueList",
    "ReportList",
    "ReportParagraph",
    "ReportSection",
    "ReportTable",
    "TextStyle",
    "TransitiveDependency",
]
