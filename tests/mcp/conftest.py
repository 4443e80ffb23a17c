"""Shared fixtures for MCP tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
from qdrant_client import QdrantClient

# Register tools before any test clears the registry
import codevector.mcp.tools.index  # noqa: F401
from codevector.config.models import CodeVectorConfig
from codevector.mcp.context import AppContext
from codevector.mcp.registry import ToolRegistry, registry


@pytest.fixture
def clean_registry() -> Generator[ToolRegistry, None, None]:
    """Clear and yield the global registry, restore after test."""
    saved = registry.snapshot()
    registry.clear()
    yield registry
    registry.restore(saved)


@pytest.fixture
def app_context(
    config: CodeVectorConfig, qdrant: QdrantClient, http_client: httpx.Client
) -> AppContext:
    """Context over the in-memory store and fake embedding service."""
    return AppContext.create(config, qdrant_client=qdrant, http_client=http_client)


@pytest.fixture
def wired_tools(app_context: AppContext) -> dict[str, Any]:
    """Tool name -> wrapped handler, as FastMCP would call it."""
    from codevector.mcp.server import create_mcp_server

    tools: dict[str, Any] = {}
    mcp = MagicMock()
    mcp.add_tool.side_effect = lambda tool: tools.__setitem__(tool.name, tool)

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("fastmcp.FastMCP", lambda *a, **kw: mcp)
        create_mcp_server(app_context)
    return {name: tool.fn for name, tool in tools.items()}
