"""MCP tool handlers."""

from codevector.mcp.tools import index

__all__ = ["index"]
