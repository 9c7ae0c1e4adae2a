"""Parser for .csproj project descriptors."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path, PureWindowsPath

from repomedic.models.project import PackageDependency, ProjectRecord, ProjectReference

DESCRIPTOR_PATTERN = "*.csproj"

_UNKNOWN = "unknown"
_DEFAULT_OUTPUT_TYPE = "Library"


def _namespace(root: ET.Element) -> str:
    """Return the ``{uri}`` prefix of *root*'s tag, or ``""`` for SDK-style files."""
    if root.tag.startswith("{"):
        return root.tag[: root.tag.index("}") + 1]
    return ""


def _text(element: ET.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def _flag(value: str | None, enabled: str) -> bool:
    return value is not None and value.lower() == enabled


def _reference_name(include: str) -> str:
    # Include paths are usually written with Windows separators.
    return PureWindowsPath(include).stem


def identity_record(descriptor_path: Path, root_path: Path) -> ProjectRecord:
    """A record carrying only the fields derived from the descriptor path."""
    return ProjectRecord(
        project_path=str(descriptor_path),
        project_name=descriptor_path.stem,
        relative_path=os.path.relpath(descriptor_path, root_path),
    )


def parse_descriptor(descriptor_path: Path, root_path: Path) -> ProjectRecord:
    """Parse one descriptor into a :class:`ProjectRecord`.

    Never raises: on any failure the returned record carries only its
    identity fields plus a single entry in ``parse_errors``.
    """
    record = identity_record(descriptor_path, root_path)
    try:
        root = ET.parse(descriptor_path).getroot()
        ns = _namespace(root)
        _read_properties(root, ns, record)
        record.package_dependencies = _read_package_references(root, ns)
        record.project_references = _read_project_references(root, ns)
    except Exception as exc:
        failed = identity_record(descriptor_path, root_path)
        failed.parse_errors.append(f"{type(exc).__name__}: {exc}")
        return failed
    return record


def _read_properties(root: ET.Element, ns: str, record: ProjectRecord) -> None:
    """Fill build settings from the first ``PropertyGroup``."""
    group = root.find(f".//{ns}PropertyGroup")
    if group is None:
        return

    record.target_framework = _text(group.find(f"{ns}TargetFramework")) or _text(
        group.find(f"{ns}TargetFrameworks")
    )
    output_type = _text(group.find(f"{ns}OutputType"))
    record.output_type = output_type or _DEFAULT_OUTPUT_TYPE
    record.nullable_enabled = _flag(_text(group.find(f"{ns}Nullable")), "enable")
    record.implicit_usings_enabled = _flag(
        _text(group.find(f"{ns}ImplicitUsings")), "enable"
    )
    record.language_version = _text(group.find(f"{ns}LangVersion")) or None
    record.generates_documentation = _flag(
        _text(group.find(f"{ns}GenerateDocumentationFile")), "true"
    )


def _read_package_references(root: ET.Element, ns: str) -> list[PackageDependency]:
    """Collect ``PackageReference`` items, first declaration of a name wins."""
    packages: list[PackageDependency] = []
    seen: set[str] = set()
    for ref in root.iter(f"{ns}PackageReference"):
        name = ref.get("Include") or _UNKNOWN
        version = ref.get("Version") or _text(ref.find(f"{ns}Version")) or _UNKNOWN
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)
        packages.append(PackageDependency(name=name, version=version))
    return packages


def _read_project_references(root: ET.Element, ns: str) -> list[ProjectReference]:
    refs: list[ProjectReference] = []
    for ref in root.iter(f"{ns}ProjectReference"):
        include = ref.get("Include") or _UNKNOWN
        refs.append(
            ProjectReference(
                project_name=_reference_name(include),
                path=include,
                is_private=_flag(ref.get("PrivateAssets"), "all"),
                condition=ref.get("Condition"),
            )
        )
    return refs
