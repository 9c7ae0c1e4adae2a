"""Command table shared by the CLI and the MCP server."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from repomedic.engines.bom import build_bom_report
from repomedic.engines.health_scanner import RepositoryScanner, build_health_report
from repomedic.exceptions import RepoMedicError
from repomedic.output.base import Renderer

if TYPE_CHECKING:
    from repomedic.context import RunContext

log = structlog.get_logger("repomedic.commands")

CommandHandler = Callable[["RunContext", dict[str, str], Renderer], int]


@dataclass(frozen=True)
class CommandArgument:
    long_name: str
    description: str
    short_name: str | None = None
    required: bool = False
    default: str | None = None


@dataclass(frozen=True)
class CommandSpec:
    """A command exposed to every front end."""

    name: str
    description: str
    handler: CommandHandler
    arguments: list[CommandArgument] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)

    def run(self, context: RunContext, args: dict[str, str], renderer: Renderer) -> int:
        return self.handler(context, args, renderer)


_PATH_ARGUMENT = CommandArgument(
    long_name="path",
    short_name="p",
    description="Path to the repository to analyze",
    default="current directory",
)


def run_health(context: RunContext, args: dict[str, str], renderer: Renderer) -> int:
    """Scan a repository and render the health dashboard."""
    try:
        scanner = RepositoryScanner(args.get("path"), context)
    except RepoMedicError as e:
        log.warning("commands.health_failed", error=str(e))
        renderer.render_error(str(e))
        return 1

    renderer.render_banner()
    renderer.render_section_header("Repository Health Dashboard")
    with renderer.wait(f"Scanning {scanner.root_path} ..."):
        projects = scanner.scan()
    renderer.render_report(build_health_report(projects, scanner.root_path))
    return 0


def run_bom(context: RunContext, args: dict[str, str], renderer: Renderer) -> int:
    """Render the bill of materials for a repository."""
    renderer.render_banner()
    renderer.render_section_header("Bill of Materials (BOM)")
    try:
        with renderer.wait("Building bill of materials ..."):
            report = build_bom_report(args.get("path"), context)
    except RepoMedicError as e:
        log.warning("commands.bom_failed", error=str(e))
        renderer.render_error(f"Failed to generate BOM: {e}")
        return 1
    renderer.render_report(report)
    return 0


def build_commands() -> list[CommandSpec]:
    return [
        CommandSpec(
            name="health",
            description="Display repository health dashboard",
            handler=run_health,
            arguments=[_PATH_ARGUMENT],
            examples=[
                "repomedic health",
                "repomedic health /path/to/repo",
                "repomedic health --format markdown > health.md",
            ],
        ),
        CommandSpec(
            name="bom",
            description="Generate bill of materials report",
            handler=run_bom,
            arguments=[_PATH_ARGUMENT],
            examples=[
                "repomedic bom",
                "repomedic bom /path/to/repo --format md > bom.md",
            ],
        ),
    ]
