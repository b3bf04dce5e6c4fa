"""
Stdio transport built on the MCP SDK.

The SDK owns framing, the initialize handshake and version negotiation; this
module only attaches the bounty tool registry. stdout carries protocol
messages only, so logs belong on stderr.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from bounty_board_mcp.board_api import BountyBoardClient, default_client
from bounty_board_mcp.config import BountyBoardConfig, MCP_SERVER_NAME, MCP_SERVER_VERSION
from bounty_board_mcp.mcp import TOOL_REGISTRY, call_tool

logger = logging.getLogger(__name__)


def build_server(client: Optional[BountyBoardClient] = None) -> Server:
    """Return an SDK server exposing every tool in TOOL_REGISTRY."""
    server = Server(MCP_SERVER_NAME, version=MCP_SERVER_VERSION)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in TOOL_REGISTRY.values()
        ]

    @server.call_tool()
    async def _call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        # Raised errors are turned into isError results by the SDK.
        text = await call_tool(name, arguments or {}, client=client)
        return [types.TextContent(type="text", text=text)]

    return server


async def run_stdio(config: Optional[BountyBoardConfig] = None) -> None:
    """Attach the registry to this process's stdin/stdout and serve until EOF."""
    client = BountyBoardClient(config) if config is not None else default_client
    server = build_server(client)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Bounty Board MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.aclose()
