"""Health scanner engine: descriptors, line counts and dependency reconciliation."""

from repomedic.engines.health_scanner.report import build_health_report
from repomedic.engines.health_scanner.scanner import (
    RepositoryScanner,
    discover_descriptors,
    scan_repository,
)

__all__ = ["RepositoryScanner", "build_health_report", "discover_descriptors", "scan_repository"]
