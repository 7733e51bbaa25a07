"""Tests for the MCP server tool surface."""

import asyncio

from pfdocs.config import Settings
from pfdocs.server import create_mcp_server


def test_registers_tools(settings: Settings):
    mcp = create_mcp_server(settings)

    tools = {tool.name: tool for tool in asyncio.run(mcp.list_tools())}

    assert set(tools) == {"search", "get", "ls", "stats"}
    assert set(tools["search"].inputSchema["properties"]) == {"query", "library", "source", "limit"}
    assert tools["search"].inputSchema["required"] == ["query"]
    assert set(tools["get"].inputSchema["properties"]) == {"path", "raw", "lines"}


def test_server_name(settings: Settings):
    assert create_mcp_server(settings).name == "pf-docs"
