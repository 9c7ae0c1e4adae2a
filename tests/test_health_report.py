"""Tests for the health report builder."""

from __future__ import annotations

from datetime import datetime, timezone

from repomedic.engines.health_scanner import build_health_report
from repomedic.engines.health_scanner.report import settings_glyphs
from repomedic.models.project import (
    PackageDependency,
    ProjectRecord,
    ProjectReference,
    TransitiveDependency,
)
from repomedic.models.report import ReportKeyValueList, ReportList, ReportParagraph, ReportTable, TextStyle

_SCAN_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def _project(name="App", **kwargs) -> ProjectRecord:
    return ProjectRecord(
        project_path=f"/repo/{name}/{name}.csproj",
        project_name=name,
        relative_path=f"{name}/{name}.csproj",
        **kwargs,
    )


def _section(report, title):
    matches = [s for s in report.sections if s.title == title]
    assert len(matches) == 1, f"expected one {title!r} section"
    return matches[0]


def _summary_items(report):
    kv = next(e for e in _section(report, "Summary").elements if isinstance(e, ReportKeyValueList))
    return {item.key: item for item in kv.items}


class TestEmptyRepository:
    def test_notice_and_no_table(self, tmp_path):
        report = build_health_report([], tmp_path, scan_time=_SCAN_TIME)
        notice = _section(report, "Notice")
        (paragraph,) = notice.elements
        assert isinstance(paragraph, ReportParagraph)
        assert paragraph.style is TextStyle.WARNING
        assert "No .NET projects found" in paragraph.text
        titles = [s.title for s in report.sections]
        assert "Projects" not in titles
        assert "Project Details" not in titles

    def test_summary_warns(self, tmp_path):
        report = build_health_report([], tmp_path, scan_time=_SCAN_TIME)
        (paragraph,) = _section(report, "Summary").elements
        assert paragraph.text == "Found 0 project(s)"
        assert paragraph.style is TextStyle.WARNING


class TestMetadata:
    def test_scan_time_and_root(self, tmp_path):
        report = build_health_report([], tmp_path, scan_time=_SCAN_TIME)
        assert report.title == "Repository Health Dashboard"
        assert report.metadata["ScanTime"] == "2024-05-01 12:30:00Z"
        assert report.metadata["RootPath"] == str(tmp_path)

    def test_repository_origin(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "config").write_text(
            '[core]\n\tbare = false\n[remote "origin"]\n\turl = https://example.com/org/repo.git\n'
        )
        report = build_health_report([], tmp_path, scan_time=_SCAN_TIME)
        assert report.metadata["Repository"] == "https://example.com/org/repo.git"


class TestSummary:
    def test_counts_and_styles(self, tmp_path):
        projects = [
            _project("A", nullable_enabled=True, implicit_usings_enabled=True, total_lines_of_code=10,
                     package_dependencies=[PackageDependency("Foo", "1.0")]),
            _project("B", nullable_enabled=True, generates_documentation=False, total_lines_of_code=5),
        ]
        items = _summary_items(build_health_report(projects, tmp_path, scan_time=_SCAN_TIME))
        assert items["Total Projects"].value == "2"
        assert items["Total Lines of Code"].value == "15"
        assert items["Total NuGet Packages"].value == "1"
        assert items["Projects without Nullable"].value == "0"
        assert items["Projects without Nullable"].value_style is TextStyle.SUCCESS
        assert items["Projects without Implicit Usings"].value == "1"
        assert items["Projects without Implicit Usings"].value_style is TextStyle.WARNING
        assert items["Projects missing Documentation"].value == "2"


class TestProjectsTable:
    def test_row_per_project(self, tmp_path):
        projects = [
            _project("A", target_framework="net8.0", output_type="Exe", nullable_enabled=True,
                     generates_documentation=True, total_lines_of_code=42),
            _project("B"),
        ]
        report = build_health_report(projects, tmp_path, scan_time=_SCAN_TIME)
        table = next(e for e in _section(report, "Projects").elements if isinstance(e, ReportTable))
        assert table.headers[0] == "Project Name"
        assert table.rows[0] == ["A", "A/A.csproj", "net8.0", "Exe", "42", "0", "✓N ✓D"]
        assert table.rows[1][2] == "unknown"
        assert table.rows[1][-1] == "-"

    def test_settings_glyphs(self):
        assert settings_glyphs(_project(implicit_usings_enabled=True)) == "✓U"


class TestDetails:
    def _lists(self, report, name):
        details = _section(report, "Project Details")
        sub = next(s for s in details.elements if s.title == name)
        assert sub.level == 2
        return {e.title: e for e in sub.elements if isinstance(e, ReportList)}

    def test_package_preview_truncates(self, tmp_path):
        deps = [PackageDependency(f"Pkg{i}", "1.0") for i in range(8)]
        report = build_health_report([_project(package_dependencies=deps)], tmp_path)
        listing = self._lists(report, "App")["NuGet Packages (8)"]
        assert len(listing.items) == 6
        assert listing.items[0] == "Pkg0 (1.0)"
        assert listing.items[-1] == "... and 3 more"

    def test_references_and_transitive_labels(self, tmp_path):
        project = _project(
            project_references=[
                ProjectReference("Core", "..\\Core\\Core.csproj"),
                ProjectReference("Shared", "../Shared/Shared.csproj", is_private=True),
            ],
            transitive_dependencies=[
                TransitiveDependency("Bar", "2.0", source_package="Foo"),
                TransitiveDependency("Baz", "3.0"),
            ],
        )
        lists = self._lists(build_health_report([project], tmp_path), "App")
        assert lists["Project References (2)"].items == ["Core", "Shared [Private]"]
        assert lists["Transitive Dependencies (2)"].items == ["Bar (2.0) via Foo", "Baz (3.0)"]

    def test_empty_collections_omitted(self, tmp_path):
        assert self._lists(build_health_report([_project()], tmp_path), "App") == {}


class TestParseErrors:
    def test_errors_section(self, tmp_path):
        broken = _project("Broken", parse_errors=["ParseError: unclosed token"])
        report = build_health_report([_project("Ok"), broken], tmp_path)
        (errors,) = _section(report, "Parse Errors").elements
        assert errors.title == "Broken"
        assert errors.items == ["ParseError: unclosed token"]

    def test_no_errors_section_when_clean(self, tmp_path):
        report = build_health_report([_project()], tmp_path)
        assert "Parse Errors" not in [s.title for s in report.sections]
