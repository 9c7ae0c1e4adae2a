"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(key: str, default: int, minimum: int = 1) -> int:
    return max(minimum, int(os.environ.get(key, default)))


@dataclass(frozen=True)
class Settings:
    """Knobs for one invocation.  CLI flags override via :meth:`with_overrides`."""

    restore: bool = True
    dotnet_executable: str = "dotnet"
    max_workers: int = 4
    license_concurrency: int = 10
    nuget_packages_dir: Path | None = None

    def __post_init__(self) -> None:
        # pools and semaphores need at least one slot
        object.__setattr__(self, "max_workers", max(1, self.max_workers))
        object.__setattr__(self, "license_concurrency", max(1, self.license_concurrency))

    def with_overrides(self, **changes) -> Settings:
        """Return a copy with the non-None *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_settings() -> Settings:
    """Build :class:`Settings` from ``REPOMEDIC_*`` environment variables."""
    packages_dir = os.environ.get("REPOMEDIC_NUGET_PACKAGES")
    return Settings(
        restore=_env_bool("REPOMEDIC_RESTORE", True),
        dotnet_executable=os.environ.get("REPOMEDIC_DOTNET", "dotnet"),
        max_workers=_env_int("REPOMEDIC_MAX_WORKERS", os.cpu_count() or 4),
        license_concurrency=_env_int("REPOMEDIC_LICENSE_CONCURRENCY", 10),
        nuget_packages_dir=Path(packages_dir) if packages_dir else None,
    )
