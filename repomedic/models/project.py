"""Data models for scanned projects."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PackageDependency:
    """A direct package reference declared in a descriptor."""

    name: str
    version: str


@dataclass
class ProjectReference:
    """A project-to-project reference within the repository."""

    project_name: str  # referenced descriptor name without extension
    path: str  # Include attribute as written
    is_private: bool = False  # PrivateAssets="all"
    condition: str | None = None


@dataclass
class TransitiveDependency:
    """A package pulled in indirectly through a direct dependency.

    ``depth`` is always 1: only the direct → transitive hop is attributed,
    deeper chains are reported flat.
    """

    package_name: str
    version: str
    source_package: str | None = None
    is_private: bool = False
    depth: int = 1


@dataclass
class ProjectRecord:
    """Everything collected about one descriptor during a scan.

    A record is produced for every discovered descriptor.  When parsing
    fails only the identity fields are set and ``parse_errors`` explains why.
    """

    project_path: str
    project_name: str
    relative_path: str
    target_framework: str | None = None
    output_type: str = "Library"
    nullable_enabled: bool = False
    implicit_usings_enabled: bool = False
    language_version: str | None = None
    generates_documentation: bool = False
    total_lines_of_code: int = 0
    package_dependencies: list[PackageDependency] = field(default_factory=list)
    project_references: list[ProjectReference] = field(default_factory=list)
    transitive_dependencies: list[TransitiveDependency] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return f"{self.project_name} ({self.relative_path})"

    @property
    def has_errors(self) -> bool:
        return bool(self.parse_errors)
