"""MCP stdio server exposing every command as a tool."""

from __future__ import annotations

import asyncio
import io
import json
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from mcp.server.fastmcp import FastMCP

from repomedic.commands import CommandSpec
from repomedic.context import RunContext
from repomedic.exceptions import UnknownCommandError
from repomedic.output.json_lines import JsonLinesRenderer

log = structlog.get_logger("repomedic.mcp")


def call_command(context: RunContext, name: str, args: dict[str, str]) -> dict[str, Any]:
    """Run command *name* with output captured as JSON lines.

    Raises :class:`UnknownCommandError` when *name* is not registered.
    Any failure inside the command is reported in the result, never raised.
    """
    spec = context.commands.get(name)
    if spec is None:
        raise UnknownCommandError(name, sorted(context.commands))

    buffer = io.StringIO()
    renderer = JsonLinesRenderer(buffer)
    try:
        exit_code = spec.run(context, args, renderer)
    except Exception as exc:
        log.exception("mcp.command_failed", command=name)
        return {"exit_code": 1, "error": f"{type(exc).__name__}: {exc}"}
    return {"exit_code": exit_code, "output": buffer.getvalue()}


def _make_tool(context: RunContext, spec: CommandSpec) -> Callable[..., Awaitable[str]]:
    async def _tool(path: str = "") -> str:
        log.info("mcp.tool_called", command=spec.name, path=path)
        # commands may call asyncio.run(), so they stay off the server loop
        result = await asyncio.to_thread(call_command, context, spec.name, {"path": path})
        return json.dumps(result, ensure_ascii=False)

    _tool.__name__ = spec.name
    return _tool


def create_server(context: RunContext) -> FastMCP:
    """Create a FastMCP server with one tool per registered command.

    *context* is captured by closure; tool parameters only expose the
    command arguments.
    """
    mcp = FastMCP("repomedic")
    for spec in context.commands.values():
        description = spec.description
        if spec.arguments:
            details = "; ".join(f"{a.long_name}: {a.description}" for a in spec.arguments)
            description = f"{description}. Arguments: {details}"
        mcp.tool(name=spec.name, description=description)(_make_tool(context, spec))
    return mcp


def serve(context: RunContext) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    log.info("mcp.serving", tools=sorted(context.commands))
    create_server(context).run()
