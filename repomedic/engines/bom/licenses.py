"""License lookup against the local NuGet global packages folder."""

from __future__ import annotations

import asyncio
import subprocess
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

import structlog

log = structlog.get_logger("repomedic.engine")

_LOCALS_PREFIX = "global-packages:"

_URL_LICENSES: list[tuple[str, str]] = [
    ("mit", "MIT"),
    ("apache", "Apache-2.0"),
    ("bsd", "BSD"),
    ("gpl", "GPL"),
]

_OPEN_SOURCE_LICENSES = (
    "mit", "apache", "bsd", "gpl", "lgpl", "mpl", "isc", "unlicense",
    "cc0", "zlib", "ms-pl", "ms-rl", "eclipse", "cddl", "artistic",
)
_CODE_HOSTS = ("github.com", "gitlab.com", "bitbucket.org", "codeplex.com", "sourceforge.net")
_COMMERCIAL_INDICATORS = (
    "commercial", "proprietary", "enterprise", "professional", "premium",
    "telerik", "devexpress", "syncfusion", "infragistics", "componentone",
)
_COMMERCIAL_LICENSES = ("proprietary", "commercial", "eula")


@dataclass
class BomPackage:
    """One unique ``name@version`` across the repository."""

    name: str
    version: str
    is_direct: bool
    projects: list[str] = field(default_factory=list)
    license: str | None = None
    license_url: str | None = None
    source_type: str = "Unknown"
    commercial: str = "Unknown"


def find_global_packages_folder(
    override: Path | None = None, dotnet: str = "dotnet"
) -> Path | None:
    """Locate the NuGet global packages folder.

    Order: explicit *override*, ``dotnet nuget locals global-packages --list``,
    then ``~/.nuget/packages``.
    """
    if override is not None:
        return override if override.is_dir() else None

    try:
        result = subprocess.run(
            [dotnet, "nuget", "locals", "global-packages", "--list"],
            capture_output=True,
            text=True,
        )
        if result.returncode == 0:
            for line in result.stdout.splitlines():
                line = line.strip()
                if line.lower().startswith(_LOCALS_PREFIX):
                    candidate = Path(line[len(_LOCALS_PREFIX) :].strip())
                    if candidate.is_dir():
                        return candidate
    except OSError as e:
        log.debug("bom.nuget_locals_unavailable", error=str(e))

    default = Path.home() / ".nuget" / "packages"
    return default if default.is_dir() else None


def _nuspec_path(packages_root: Path, package: BomPackage) -> Path | None:
    folder = packages_root / package.name.lower() / package.version.lower()
    for candidate in (folder / f"{package.name.lower()}.nuspec", folder / f"{package.name}.nuspec"):
        if candidate.is_file():
            return candidate
    return None


def _child(parent: ET.Element, ns: str, tag: str) -> ET.Element | None:
    return parent.find(f"{ns}{tag}")


def _child_text(parent: ET.Element, ns: str, tag: str) -> str | None:
    el = _child(parent, ns, tag)
    if el is None or el.text is None:
        return None
    return el.text.strip() or None


def apply_nuspec(package: BomPackage, content: str) -> None:
    """Fill license, source type and commercial status from nuspec XML."""
    root = ET.fromstring(content)
    ns = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""
    metadata = _child(root, ns, "metadata")
    if metadata is None:
        return

    license_el = _child(metadata, ns, "license")
    if license_el is not None:
        kind = license_el.get("type")
        if kind == "expression":
            package.license = (license_el.text or "").strip() or None
        elif kind == "file":
            package.license = "See package contents"
    else:
        url = _child_text(metadata, ns, "licenseUrl")
        if url:
            package.license_url = url
            lowered = url.lower()
            package.license = next(
                (name for keyword, name in _URL_LICENSES if keyword in lowered), "See URL"
            )

    repository = _child(metadata, ns, "repository")
    classify_package(
        package,
        project_url=_child_text(metadata, ns, "projectUrl"),
        repository_url=repository.get("url") if repository is not None else None,
        authors=_child_text(metadata, ns, "authors"),
        owners=_child_text(metadata, ns, "owners"),
    )


def classify_package(
    package: BomPackage,
    *,
    project_url: str | None = None,
    repository_url: str | None = None,
    authors: str | None = None,
    owners: str | None = None,
) -> None:
    """Set ``source_type`` and ``commercial`` from license and publisher hints."""
    license_ = (package.license or "").lower()
    license_url = (package.license_url or "").lower()
    package_id = package.name.lower()
    authors = (authors or "").lower()
    owners = (owners or "").lower()

    is_open = any(oss in license_ for oss in _OPEN_SOURCE_LICENSES) if license_ else False
    if not is_open and license_url:
        is_open = (
            any(oss in license_url for oss in _OPEN_SOURCE_LICENSES)
            or "github.com" in license_url
            or "opensource.org" in license_url
        )
    if not is_open:
        urls = [u.lower() for u in (project_url, repository_url) if u]
        is_open = any(host in url for url in urls for host in _CODE_HOSTS)

    is_microsoft = (
        package_id.startswith(("microsoft.", "system."))
        or "microsoft" in authors
        or "microsoft" in owners
    )
    has_indicators = any(
        marker in field_ for marker in _COMMERCIAL_INDICATORS for field_ in (license_, authors, package_id)
    )
    has_commercial_license = any(cl in license_ for cl in _COMMERCIAL_LICENSES)

    if is_open:
        package.source_type = "Open Source"
    elif has_commercial_license or has_indicators or is_microsoft:
        package.source_type = "Closed Source"
    else:
        package.source_type = "Unknown"

    if has_commercial_license or has_indicators:
        package.commercial = "Yes"
    elif is_open or is_microsoft:
        package.commercial = "No"
    else:
        package.commercial = "Unknown"


def _lookup_one(packages_root: Path, package: BomPackage) -> None:
    nuspec = _nuspec_path(packages_root, package)
    if nuspec is None:
        return
    apply_nuspec(package, nuspec.read_text(encoding="utf-8-sig"))


async def fetch_licenses(
    packages: list[BomPackage], packages_root: Path, concurrency: int = 10
) -> None:
    """Look up license data for every package concurrently, in place.

    A failing lookup is logged and leaves that package untouched.
    """
    sem = asyncio.Semaphore(max(1, concurrency))

    async def _fetch(package: BomPackage) -> None:
        async with sem:
            await asyncio.to_thread(_lookup_one, packages_root, package)

    results = await asyncio.gather(*(_fetch(p) for p in packages), return_exceptions=True)
    for package, outcome in zip(packages, results):
        if isinstance(outcome, Exception):
            log.warning("bom.license_lookup_failed", package=package.name, error=str(outcome))
