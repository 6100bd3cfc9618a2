# =============================================================================
# lattice_mcp/server.py  —  FastMCP Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Puts the Dispatcher behind a FastMCP server instance.  Every descriptor
#   in the catalog becomes one MCP tool; every tool call is handed to
#   Dispatcher.call_tool() untouched.
#
# WHY NOT @mcp.tool() DECORATORS?
#   FastMCP normally derives a tool's schema from a Python signature and
#   validates arguments before our code runs.  Here the catalog IS the
#   schema, and a missing argument has to come back in-band as
#   {"error": "user_id is required"}, so each tool is a small Tool subclass
#   that advertises the descriptor verbatim and forwards the raw arguments.
#
# UNKNOWN TOOLS:
#   FastMCP would reject an unregistered name with a protocol error.  The
#   middleware below routes those through the dispatcher too, so the agent
#   gets {"error": "Unknown tool: ..."} like any other failure.
#
# LOGGING:
#   We log to STDERR because the MCP server talks to its client over STDOUT.
#   A stray print() or a stdout log handler would corrupt the JSON-RPC stream.
# =============================================================================

import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from lattice_mcp.catalog import ToolDescriptor
from lattice_mcp.dispatcher import Dispatcher

SERVER_NAME = "lattice-hq-mcp-server"

_INSTRUCTIONS = (
    "Read-only access to Lattice HQ: users and reporting lines, goals, review "
    "cycles, feedback, departments and updates.  Every tool returns JSON text; "
    'failures come back as {"error": "..."}.'
)


def configure_logging(level: str = "INFO") -> None:
    """Send all logging to stderr with the server's short timestamp format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _text_result(text: str) -> ToolResult:
    return ToolResult(content=[TextContent(type="text", text=text)])


class DispatchedTool(Tool):
    """An MCP tool whose schema comes from a ToolDescriptor.

    Arguments are not validated by FastMCP; the dispatcher does it and
    reports problems in-band.
    """

    dispatcher: Any = Field(exclude=True)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: Dispatcher) -> "DispatchedTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return _text_result(await self.dispatcher.call_tool(self.name, arguments))


class UnknownToolMiddleware(Middleware):
    """Answer calls to unregistered tool names in-band instead of as protocol errors."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if name not in self.dispatcher:
            return _text_result(await self.dispatcher.call_tool(name, context.message.arguments))
        return await call_next(context)


def create_server(dispatcher: Dispatcher, name: str = SERVER_NAME) -> FastMCP:
    """Build a FastMCP server exposing every tool the dispatcher knows.

    Args:
        dispatcher: Already bound to the client chosen at startup.
        name: Server identity reported to MCP clients.

    Returns:
        A FastMCP instance; call .run(transport="stdio") to serve it.
    """
    mcp = FastMCP(name, instructions=_INSTRUCTIONS)
    for descriptor in dispatcher.list_tools():
        mcp.add_tool(DispatchedTool.from_descriptor(descriptor, dispatcher))
    mcp.add_middleware(UnknownToolMiddleware(dispatcher))
    return mcp
