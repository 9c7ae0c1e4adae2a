"""RepositoryScanner: discover descriptors and build one record per project."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from repomedic.context import RunContext
from repomedic.engines.health_scanner.descriptor import (
    DESCRIPTOR_PATTERN,
    identity_record,
    parse_descriptor,
)
from repomedic.engines.health_scanner.line_counter import count_lines_of_code
from repomedic.engines.health_scanner.restore import restore_packages
from repomedic.engines.health_scanner.transitive import resolve_transitive_dependencies
from repomedic.exceptions import ScanRootError
from repomedic.models.project import ProjectRecord

log = structlog.get_logger("repomedic.engine")

_SKIP_DIRS = {"bin", "obj", "node_modules"}


def resolve_root(root_path: str | Path | None) -> Path:
    """Absolute scan root; the current directory when *root_path* is empty.

    Raises :class:`ScanRootError` when the path is missing or not a directory.
    """
    raw = str(root_path).strip() if root_path is not None else ""
    root = Path(raw).resolve() if raw else Path.cwd()
    if not root.exists():
        raise ScanRootError(str(root), "path does not exist")
    if not root.is_dir():
        raise ScanRootError(str(root), "not a directory")
    return root


def discover_descriptors(root_path: Path) -> list[Path]:
    """All descriptor files below *root_path*, skipping build output and hidden dirs."""
    suffix = DESCRIPTOR_PATTERN.lstrip("*")
    found: list[Path] = []

    def _on_error(exc: OSError) -> None:
        log.warning("scanner.walk_error", path=exc.filename, error=str(exc))

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_on_error):
        dirnames[:] = sorted(
            d for d in dirnames if d.lower() not in _SKIP_DIRS and not d.startswith(".")
        )
        for name in sorted(filenames):
            if name.endswith(suffix):
                found.append(Path(dirpath) / name)
    return found


class RepositoryScanner:
    """Scan a directory tree for projects and collect their health data."""

    def __init__(self, root_path: str | Path | None, context: RunContext | None = None) -> None:
        self.root_path = resolve_root(root_path)
        self._context = context or RunContext()
        self._projects: list[ProjectRecord] = []

    @property
    def projects(self) -> list[ProjectRecord]:
        return list(self._projects)

    @property
    def project_count(self) -> int:
        return len(self._projects)

    def scan(self) -> list[ProjectRecord]:
        """Run the full scan and return the records collected.

        A project that fails unexpectedly is kept as an identity record with
        one error.  Errors while enumerating are logged and the records
        gathered so far are returned.
        """
        self._projects = []
        settings = self._context.settings

        if settings.restore:
            restore_packages(self.root_path, settings.dotnet_executable)

        try:
            descriptors = discover_descriptors(self.root_path)
        except Exception:
            log.exception("scanner.enumeration_failed", root=str(self.root_path))
            descriptors = []

        for descriptor in descriptors:
            try:
                record = self._scan_project(descriptor)
            except Exception as exc:
                log.exception("scanner.project_failed", descriptor=str(descriptor))
                record = identity_record(descriptor, self.root_path)
                record.parse_errors.append(f"{type(exc).__name__}: {exc}")
            self._projects.append(record)

        log.info(
            "scanner.completed",
            root=str(self.root_path),
            projects=len(self._projects),
            with_errors=sum(1 for p in self._projects if p.has_errors),
        )
        return self.projects

    def _scan_project(self, descriptor: Path) -> ProjectRecord:
        record = parse_descriptor(descriptor, self.root_path)
        if record.has_errors:
            log.debug("scanner.descriptor_degraded", project=record.project_name)
            return record

        project_dir = descriptor.parent
        record.total_lines_of_code = count_lines_of_code(
            project_dir, max_workers=self._context.settings.max_workers
        )

        record.transitive_dependencies = resolve_transitive_dependencies(
            project_dir,
            record.package_dependencies,
            [ref.project_name for ref in record.project_references],
        )
        return record


def scan_repository(
    root_path: str | Path | None, context: RunContext | None = None
) -> list[ProjectRecord]:
    """Scan *root_path* and return one :class:`ProjectRecord` per descriptor."""
    return RepositoryScanner(root_path, context).scan()
