"""Bill of materials report: every package the repository ships with."""

from __future__ import annotations

import asyncio
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

import structlog

from repomedic.context import RunContext
from repomedic.engines.bom.licenses import BomPackage, fetch_licenses, find_global_packages_folder
from repomedic.engines.health_scanner.descriptor import parse_descriptor
from repomedic.engines.health_scanner.restore import restore_packages
from repomedic.engines.health_scanner.scanner import discover_descriptors, resolve_root
from repomedic.engines.health_scanner.transitive import resolve_transitive_dependencies
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

log = structlog.get_logger("repomedic.engine")

BOM_TITLE = "Bill of Materials (BOM)"

_PACKAGE_HEADERS = ["Package", "Version", "Type", "License", "Source Type", "Commercial", "Used In"]


def collect_packages(projects: list[ProjectRecord]) -> list[BomPackage]:
    """Merge direct and transitive packages across *projects*, keyed by ``name@version``.

    A package that is direct anywhere is reported as direct.
    """
    packages: dict[str, BomPackage] = {}

    def _add(name: str, version: str, is_direct: bool, project: str) -> None:
        key = f"{name.lower()}@{version.lower()}"
        entry = packages.get(key)
        if entry is None:
            entry = packages[key] = BomPackage(name=name, version=version, is_direct=is_direct)
        elif is_direct:
            entry.is_direct = True
        if project not in entry.projects:
            entry.projects.append(project)

    for project in projects:
        for dep in project.package_dependencies:
            _add(dep.name, dep.version, True, project.project_name)
    for project in projects:
        for trans in project.transitive_dependencies:
            _add(trans.package_name, trans.version, False, project.project_name)

    return sorted(packages.values(), key=lambda p: (p.name.lower(), p.version))


def _load_projects(root: Path, descriptors: list[Path]) -> list[ProjectRecord]:
    projects: list[ProjectRecord] = []
    for descriptor in descriptors:
        record = parse_descriptor(descriptor, root)
        if record.has_errors:
            log.warning("bom.descriptor_skipped", project=record.project_name, errors=record.parse_errors)
            continue
        record.transitive_dependencies = resolve_transitive_dependencies(
            descriptor.parent,
            record.package_dependencies,
            [ref.project_name for ref in record.project_references],
        )
        projects.append(record)
    return projects


def build_bom_report(
    root_path: str | Path | None,
    context: RunContext | None = None,
    *,
    scan_time: datetime | None = None,
) -> ReportDocument:
    """Scan *root_path* and build the bill of materials report."""
    context = context or RunContext()
    settings = context.settings
    root = resolve_root(root_path)

    if settings.restore:
        restore_packages(root, settings.dotnet_executable)

    report = ReportDocument(title=BOM_TITLE)
    report.metadata["ScanTime"] = (scan_time or datetime.now(timezone.utc)).strftime(
        "%Y-%m-%d %H:%M:%SZ"
    )
    report.metadata["RootPath"] = str(root)

    summary = ReportSection(title="BOM Summary", level=1)
    report.add_section(summary)

    descriptors = discover_descriptors(root)
    descriptors_found = bool(descriptors)
    projects = _load_projects(root, descriptors)
    packages = collect_packages(projects)

    if packages:
        packages_root = find_global_packages_folder(
            settings.nuget_packages_dir, settings.dotnet_executable
        )
        if packages_root is None:
            log.warning("bom.packages_folder_missing")
        else:
            asyncio.run(fetch_licenses(packages, packages_root, settings.license_concurrency))

    summary.add_element(
        ReportParagraph(
            f"Inventory of {len(packages)} package(s) across {len(projects)} project(s).",
            TextStyle.NORMAL,
        )
    )

    report.add_section(_packages_section(packages, descriptors_found))
    report.add_section(_frameworks_section(projects))
    report.add_section(_services_section())
    return report


def _packages_section(packages: list[BomPackage], descriptors_found: bool) -> ReportSection:
    section = ReportSection(title="NuGet Package Dependencies", level=1)
    if not descriptors_found:
        section.add_element(
            ReportParagraph("No .NET projects found in repository.", TextStyle.WARNING)
        )
        return section
    if not packages:
        section.add_element(
            ReportParagraph("No NuGet packages found in projects.", TextStyle.WARNING)
        )
        return section

    direct = sum(1 for p in packages if p.is_direct)
    counts = ReportKeyValueList()
    counts.add("Total Unique Packages", str(len(packages)))
    counts.add("Direct Dependencies", str(direct))
    counts.add("Transitive Dependencies", str(len(packages) - direct))
    section.add_element(counts)

    table = ReportTable(title="All Packages", headers=list(_PACKAGE_HEADERS))
    for p in packages:
        table.add_row(
            p.name,
            p.version,
            "Direct" if p.is_direct else "Transitive",
            p.license or "Unknown",
            p.source_type,
            p.commercial,
            ", ".join(p.projects),
        )
    section.add_element(table)
    section.add_element(
        ReportParagraph(
            "For more information about open source licenses, visit "
            "https://choosealicense.com/licenses/",
            TextStyle.DIM,
        )
    )
    return section


def _frameworks_section(projects: list[ProjectRecord]) -> ReportSection:
    section = ReportSection(title="Framework & Platform Features", level=1)
    if not projects:
        section.add_element(ReportParagraph("No target frameworks detected.", TextStyle.DIM))
        return section

    frameworks: Counter[str] = Counter()
    for p in projects:
        for tfm in (p.target_framework or "unknown").split(";"):
            if tfm.strip():
                frameworks[tfm.strip()] += 1
    output_types = Counter(p.output_type for p in projects)

    tfm_list = ReportList(title="Target Frameworks")
    for tfm, count in sorted(frameworks.items()):
        tfm_list.add_item(f"{tfm} ({count} project(s))")
    section.add_element(tfm_list)

    kinds = ReportKeyValueList(title="Output Types")
    for kind, count in sorted(output_types.items()):
        kinds.add(kind, str(count))
    section.add_element(kinds)
    return section


def _services_section() -> ReportSection:
    section = ReportSection(title="External Services & Vendors", level=1)
    section.add_element(
        ReportParagraph("External service detection is not available yet.", TextStyle.DIM)
    )
    return section
