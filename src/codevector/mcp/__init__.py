"""MCP server module - FastMCP tool registration and wiring."""

from codevector.mcp.context import AppContext
from codevector.mcp.registry import ToolRegistry, ToolSpec
from codevector.mcp.server import create_mcp_server

__all__ = ["AppContext", "ToolRegistry", "ToolSpec", "create_mcp_server"]
