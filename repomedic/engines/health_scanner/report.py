"""Assemble the repository health report from scanned project records."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from repomedic.models.project import ProjectRecord
from repomedic.models.report import (
    ReportDocument,
    ReportKeyValueList,
    ReportList,
    ReportParagraph,
    ReportSection,
    ReportTable,
    TextStyle,
)
from repomedic.utils.git import find_repository_root, remote_origin_url

REPORT_TITLE = "Repository Health Dashboard"

# Long package lists are cut to this many entries plus a summary line.
_LIST_PREVIEW = 5

_PROJECT_HEADERS = [
    "Project Name",
    "Path",
    "Framework",
    "Output Type",
    "Lines of Code",
    "Packages",
    "Settings",
]


def _count_style(count: int) -> TextStyle:
    return TextStyle.WARNING if count > 0 else TextStyle.SUCCESS


def _check(enabled: bool) -> tuple[str, TextStyle]:
    return ("✓", TextStyle.SUCCESS) if enabled else ("✗", TextStyle.WARNING)


def settings_glyphs(project: ProjectRecord) -> str:
    """Compact settings column, e.g. ``"✓N ✓D"``; ``"-"`` when none are on."""
    glyphs = []
    if project.nullable_enabled:
        glyphs.append("✓N")
    if project.implicit_usings_enabled:
        glyphs.append("✓U")
    if project.generates_documentation:
        glyphs.append("✓D")
    return " ".join(glyphs) if glyphs else "-"


def _preview_list(title: str, labels: list[str]) -> ReportList:
    listing = ReportList(title=f"{title} ({len(labels)})")
    for label in labels[:_LIST_PREVIEW]:
        listing.add_item(label)
    if len(labels) > _LIST_PREVIEW:
        listing.add_item(f"... and {len(labels) - _LIST_PREVIEW} more")
    return listing


def build_health_report(
    projects: list[ProjectRecord],
    root_path: str | Path,
    *,
    scan_time: datetime | None = None,
) -> ReportDocument:
    """Build the health :class:`ReportDocument` for *projects*."""
    report = ReportDocument(title=REPORT_TITLE)
    scanned_at = scan_time or datetime.now(timezone.utc)
    report.metadata["ScanTime"] = scanned_at.strftime("%Y-%m-%d %H:%M:%SZ")
    report.metadata["RootPath"] = str(root_path)

    repo_root = find_repository_root(Path(root_path))
    if repo_root is not None:
        origin = remote_origin_url(repo_root)
        if origin:
            report.metadata["Repository"] = origin

    report.add_section(_summary_section(projects))

    if projects:
        report.add_section(_projects_section(projects))
        report.add_section(_details_section(projects))
    else:
        notice = ReportSection(title="Notice", level=1)
        notice.add_element(
            ReportParagraph("⚠ No .NET projects found in the repository.", TextStyle.WARNING)
        )
        report.add_section(notice)

    with_errors = [p for p in projects if p.has_errors]
    if with_errors:
        report.add_section(_errors_section(with_errors))

    return report


def _summary_section(projects: list[ProjectRecord]) -> ReportSection:
    total = len(projects)
    section = ReportSection(title="Summary", level=1)
    section.add_element(
        ReportParagraph(
            f"Found {total} project(s)",
            TextStyle.BOLD if total > 0 else TextStyle.WARNING,
        )
    )
    if total == 0:
        return section

    without_nullable = sum(1 for p in projects if not p.nullable_enabled)
    without_usings = sum(1 for p in projects if not p.implicit_usings_enabled)
    without_docs = sum(1 for p in projects if not p.generates_documentation)

    summary = ReportKeyValueList()
    summary.add("Total Projects", str(total))
    summary.add("Total Lines of Code", str(sum(p.total_lines_of_code for p in projects)))
    summary.add("Total NuGet Packages", str(sum(len(p.package_dependencies) for p in projects)))
    summary.add("Projects without Nullable", str(without_nullable), _count_style(without_nullable))
    summary.add(
        "Projects without Implicit Usings", str(without_usings), _count_style(without_usings)
    )
    summary.add("Projects missing Documentation", str(without_docs), _count_style(without_docs))
    section.add_element(summary)
    return section


def _projects_section(projects: list[ProjectRecord]) -> ReportSection:
    section = ReportSection(title="Projects", level=1)
    table = ReportTable(title="Projects Summary", headers=list(_PROJECT_HEADERS))
    for p in projects:
        table.add_row(
            p.project_name,
            p.relative_path,
            p.target_framework or "unknown",
            p.output_type or "unknown",
            str(p.total_lines_of_code),
            str(len(p.package_dependencies)),
            settings_glyphs(p),
        )
    section.add_element(table)
    section.add_element(
        ReportParagraph("Legend: N=Nullable, U=ImplicitUsings, D=Documentation", TextStyle.DIM)
    )
    return section


def _details_section(projects: list[ProjectRecord]) -> ReportSection:
    section = ReportSection(title="Project Details", level=1)
    for p in projects:
        sub = ReportSection(title=p.project_name, level=2)

        details = ReportKeyValueList()
        details.add("Path", p.relative_path)
        details.add("Lines of Code", str(p.total_lines_of_code))
        details.add("Output Type", p.output_type or "unknown")
        details.add("Target Framework", p.target_framework or "unknown")
        details.add("Language Version", p.language_version or "default")
        details.add("Nullable Enabled", *_check(p.nullable_enabled))
        details.add("Implicit Usings", *_check(p.implicit_usings_enabled))
        details.add("Documentation", *_check(p.generates_documentation))
        sub.add_element(details)

        if p.package_dependencies:
            sub.add_element(
                _preview_list(
                    "NuGet Packages",
                    [f"{pkg.name} ({pkg.version})" for pkg in p.package_dependencies],
                )
            )

        if p.project_references:
            refs = ReportList(title=f"Project References ({len(p.project_references)})")
            for ref in p.project_references:
                refs.add_item(f"{ref.project_name} [Private]" if ref.is_private else ref.project_name)
            sub.add_element(refs)

        if p.transitive_dependencies:
            labels = []
            for dep in p.transitive_dependencies:
                label = f"{dep.package_name} ({dep.version})"
                if dep.source_package:
                    label += f" via {dep.source_package}"
                if dep.is_private:
                    label += " [Private]"
                labels.append(label)
            sub.add_element(_preview_list("Transitive Dependencies", labels))

        section.add_element(sub)
    return section


def _errors_section(projects: list[ProjectRecord]) -> ReportSection:
    section = ReportSection(title="Parse Errors", level=1)
    for p in projects:
        errors = ReportList(title=p.project_name)
        for message in p.parse_errors:
            errors.add_item(message)
        section.add_element(errors)
    return section
