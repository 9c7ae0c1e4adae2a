"""Shared pytest fixtures for repomedic tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from repomedic.config import Settings
from repomedic.context import RunContext

SDK_PROJECT = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
{properties}
  </PropertyGroup>
  <ItemGroup>
{items}
  </ItemGroup>
</Project>
"""


def make_csproj(
    directory: Path,
    name: str,
    *,
    properties: str = "",
    items: str = "",
    raw: str | None = None,
) -> Path:
    """Write ``<directory>/<name>/<name>.csproj`` and return its path."""
    project_dir = directory / name
    project_dir.mkdir(parents=True, exist_ok=True)
    path = project_dir / f"{name}.csproj"
    content = raw if raw is not None else SDK_PROJECT.format(properties=properties, items=items)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(restore=False, max_workers=2)


@pytest.fixture
def context(settings):
    return RunContext.create(settings)


@pytest.fixture
def csproj():
    """Factory writing a project descriptor below a directory."""
    return make_csproj
