"""Transitive dependency resolution from NuGet lock and assets files."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from repomedic.models.project import PackageDependency, TransitiveDependency

log = structlog.get_logger("repomedic.engine")

LOCK_FILE = "packages.lock.json"
ASSETS_FILE = Path("obj") / "project.assets.json"


def resolve_transitive_dependencies(
    project_dir: Path,
    direct: list[PackageDependency],
    project_reference_names: Iterable[str],
) -> list[TransitiveDependency]:
    """Return the packages pulled in indirectly for the project in *project_dir*.

    ``packages.lock.json`` is preferred; ``obj/project.assets.json`` is the
    fallback.  Names of direct dependencies and referenced projects are
    never reported.  Missing artifacts yield an empty list, unreadable ones
    are logged and yield an empty list.
    """
    excluded = {d.name.lower() for d in direct}
    excluded.update(name.lower() for name in project_reference_names)

    lock_path = project_dir / LOCK_FILE
    if lock_path.is_file():
        data = _load_json(lock_path)
        return _from_lock_file(data, direct, excluded) if data is not None else []

    assets_path = project_dir / ASSETS_FILE
    if assets_path.is_file():
        data = _load_json(assets_path)
        return _from_assets_file(data, direct, excluded) if data is not None else []

    return []


def _load_json(path: Path) -> dict[str, Any] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as exc:
        log.warning("transitive.artifact_unreadable", path=str(path), error=str(exc))
        return None
    if not isinstance(data, dict):
        log.warning("transitive.artifact_malformed", path=str(path))
        return None
    return data


# ── packages.lock.json ───────────────────────────────────────────────────


def _from_lock_file(
    data: dict[str, Any],
    direct: list[PackageDependency],
    excluded: set[str],
) -> list[TransitiveDependency]:
    # {"dependencies": {"net8.0": {"Pkg": {"type", "resolved", "dependencies"}}}}
    frameworks = data.get("dependencies")
    if not isinstance(frameworks, dict):
        return []

    direct_names = {d.name.lower(): d.name for d in direct}
    result: list[TransitiveDependency] = []
    seen: set[str] = set()

    for packages in frameworks.values():
        if not isinstance(packages, dict):
            continue
        for name, entry in packages.items():
            key = name.lower()
            if key in excluded or key in seen or not isinstance(entry, dict):
                continue
            version = entry.get("resolved")
            if not version:
                continue
            seen.add(key)
            result.append(
                TransitiveDependency(
                    package_name=name,
                    version=str(version),
                    source_package=_lock_source(name, packages, direct_names),
                )
            )

    log.debug("transitive.lock_resolved", count=len(result))
    return result


def _lock_source(
    name: str,
    packages: dict[str, Any],
    direct_names: dict[str, str],
) -> str | None:
    """Name of the direct dependency in the same framework group that lists *name*."""
    wanted = name.lower()
    for candidate, candidate_entry in packages.items():
        if candidate.lower() not in direct_names or not isinstance(candidate_entry, dict):
            continue
        deps = candidate_entry.get("dependencies")
        if isinstance(deps, dict) and any(d.lower() == wanted for d in deps):
            return direct_names[candidate.lower()]
    return None


# ── obj/project.assets.json ──────────────────────────────────────────────


def _from_assets_file(
    data: dict[str, Any],
    direct: list[PackageDependency],
    excluded: set[str],
) -> list[TransitiveDependency]:
    # {"libraries": {"Pkg/1.0.0": {...}}, "targets": {"net8.0": {"Pkg/1.0.0": {...}}}}
    libraries = data.get("libraries")
    if not isinstance(libraries, dict):
        return []

    targets = data.get("targets")
    if not isinstance(targets, dict):
        targets = {}
    direct_names = {d.name.lower() for d in direct}

    result: list[TransitiveDependency] = []
    for library_key in libraries:
        parts = library_key.split("/")
        if len(parts) != 2:
            continue
        name, version = parts
        if name.lower() in excluded:
            continue
        result.append(
            TransitiveDependency(
                package_name=name,
                version=version,
                source_package=_assets_source(name, targets, direct_names),
            )
        )

    log.debug("transitive.assets_resolved", count=len(result))
    return result


def _assets_source(
    name: str, targets: dict[str, Any], direct_names: set[str]
) -> str | None:
    wanted = name.lower()
    for packages in targets.values():
        if not isinstance(packages, dict):
            continue
        for package_key, entry in packages.items():
            package_name = package_key.split("/")[0]
            if package_name.lower() not in direct_names or not isinstance(entry, dict):
                continue
            deps = entry.get("dependencies")
            if isinstance(deps, dict) and any(d.lower() == wanted for d in deps):
                return package_name
    return None
