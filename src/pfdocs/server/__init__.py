"""MCP server for pf-docs."""

from pfdocs.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
