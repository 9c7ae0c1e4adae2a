"""Bill of materials engine: package inventory with license classification."""

from repomedic.engines.bom.licenses import BomPackage, classify_package, fetch_licenses
from repomedic.engines.bom.report import build_bom_report, collect_packages

__all__ = ["BomPackage", "build_bom_report", "classify_package", "collect_packages", "fetch_licenses"]
