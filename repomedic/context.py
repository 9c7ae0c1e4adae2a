"""RunContext: per-invocation state handed to every pipeline stage."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repomedic.config import Settings, load_settings

if TYPE_CHECKING:
    from repomedic.commands import CommandSpec


@dataclass
class RunContext:
    """Settings plus the command table for one CLI or MCP invocation.

    Built once by the front end and passed explicitly; nothing in the
    pipeline reads process-wide state.
    """

    settings: Settings = field(default_factory=Settings)
    commands: dict[str, CommandSpec] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        command_factory: Callable[[], list[CommandSpec]] | None = None,
    ) -> RunContext:
        """Build a context from *settings* (environment by default) and commands."""
        if command_factory is None:
            from repomedic.commands import build_commands

            command_factory = build_commands
        ctx = cls(settings=settings or load_settings())
        for spec in command_factory():
            ctx.commands[spec.name] = spec
        return ctx
