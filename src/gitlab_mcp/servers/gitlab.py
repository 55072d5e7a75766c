"""GitLab MCP server: exposes the dispatcher's catalog as FastMCP tools."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.dependencies import get_context
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools.tool import Tool, ToolResult
from mcp import types as mt
from mcp.types import TextContent, ToolAnnotations

from ..client import GitLabClient
from ..config import GitLabConfig
from ..dispatcher import ToolDispatcher
from ..exceptions import GitLabError
from ..registry import ToolDefinition
from ..tools import registry


def _get_dispatcher(ctx: Context) -> ToolDispatcher:
    return ctx.request_context.lifespan_context["dispatcher"]


class DispatchedTool(Tool):
    """FastMCP tool whose arguments go to the dispatcher unvalidated."""

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        dispatcher = _get_dispatcher(get_context())
        try:
            result = await dispatcher.call_tool(self.name, arguments)
        except GitLabError as e:
            raise ToolError(str(e)) from e
        return ToolResult(
            content=[TextContent(type="text", text=block["text"]) for block in result["content"]]
        )

    @classmethod
    def from_definition(cls, definition: ToolDefinition) -> DispatchedTool:
        mode = "read" if definition.read_only else "write"
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            tags={"gitlab", mode},
            annotations=ToolAnnotations(
                readOnlyHint=definition.read_only,
                idempotentHint=definition.read_only,
                openWorldHint=True,
            ),
        )


class ReadOnlyCatalog(Middleware):
    """Lists only non-mutating tools; write tools stay registered and the dispatcher rejects them."""

    def __init__(self, names: set[str]) -> None:
        self.names = names

    async def on_list_tools(
        self,
        context: MiddlewareContext[mt.ListToolsRequest],
        call_next: CallNext[mt.ListToolsRequest, Sequence[Tool]],
    ) -> Sequence[Tool]:
        return [t for t in await call_next(context) if t.name in self.names]


def create_server(config: GitLabConfig) -> FastMCP:
    """Build a FastMCP server whose catalog honours ``config.read_only``."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        client = GitLabClient(config)
        dispatcher = ToolDispatcher(client, config)
        try:
            yield {"client": client, "config": config, "dispatcher": dispatcher}
        finally:
            await client.close()

    mcp = FastMCP(
        name="GitLab MCP Server",
        instructions=(
            "Provides tools for the GitLab API: files, repositories, commits, issues, "
            "merge requests, wikis, members, events and issue discussions."
        ),
        lifespan=lifespan,
    )

    for definition in registry:
        mcp.add_tool(DispatchedTool.from_definition(definition))
    if config.read_only:
        readable = {d.name for d in registry.available(read_only=True)}
        mcp.add_middleware(ReadOnlyCatalog(readable))
    return mcp
