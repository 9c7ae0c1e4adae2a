"""CLI entry point: repomedic.

Subcommands:
    repomedic health [PATH]      # Repository health dashboard
    repomedic bom [PATH]         # Bill of materials
    repomedic mcp                # Serve commands over MCP stdio
    repomedic version
"""

from __future__ import annotations

import sys

import click

from repomedic import __version__
from repomedic.config import load_settings
from repomedic.context import RunContext
from repomedic.core.logging import setup_logging
from repomedic.exceptions import RendererNotFoundError
from repomedic.output import FORMAT_ALIASES, create_renderer

_FORMAT_CHOICE = click.Choice(sorted(FORMAT_ALIASES), case_sensitive=False)


def _run(command: str, path: str | None, output_format: str, no_restore: bool) -> None:
    settings = load_settings()
    if no_restore:
        settings = settings.with_overrides(restore=False)
    context = RunContext.create(settings)

    try:
        renderer = create_renderer(output_format, sys.stdout)
    except RendererNotFoundError as e:
        raise click.BadParameter(str(e), param_hint="--format") from e

    exit_code = context.commands[command].run(context, {"path": path or ""}, renderer)
    sys.exit(exit_code)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """repomedic: .NET repository health analysis."""
    setup_logging(verbose)


@main.command()
@click.argument("path", required=False)
@click.option("-f", "--format", "output_format", type=_FORMAT_CHOICE, default="console", show_default=True)
@click.option("--no-restore", is_flag=True, help="Skip 'dotnet restore' before scanning")
def health(path: str | None, output_format: str, no_restore: bool) -> None:
    """Display the repository health dashboard for PATH (default: current directory)."""
    _run("health", path, output_format, no_restore)


@main.command()
@click.argument("path", required=False)
@click.option("-f", "--format", "output_format", type=_FORMAT_CHOICE, default="console", show_default=True)
@click.option("--no-restore", is_flag=True, help="Skip 'dotnet restore' before scanning")
def bom(path: str | None, output_format: str, no_restore: bool) -> None:
    """Generate the bill of materials for PATH (default: current directory)."""
    _run("bom", path, output_format, no_restore)


@main.command()
def mcp() -> None:
    """Serve every command as an MCP tool over stdio."""
    from repomedic.mcp_server import serve

    serve(RunContext.create())


@main.command()
def version() -> None:
    """Print the installed version."""
    click.echo(f"repomedic {__version__}")


if __name__ == "__main__":
    main()
