"""Shared fixtures for CLI tests."""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest
from qdrant_client import QdrantClient

from codevector.config.models import CodeVectorConfig
from codevector.mcp.context import AppContext


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration variables out of CLI runs."""
    for name in list(os.environ):
        if name.upper().startswith("CODEVECTOR__") or name in (
            "OLLAMA_URL",
            "EMBEDDING_MODEL",
            "QDRANT_HOST",
            "QDRANT_PORT",
        ):
            monkeypatch.delenv(name)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Empty YAML config so the user's global file is never read."""
    path = tmp_path / "config.yaml"
    path.write_text("")
    return path


@pytest.fixture
def fake_context(
    monkeypatch: pytest.MonkeyPatch, config: CodeVectorConfig, http_client: httpx.Client
) -> AppContext:
    """AppContext over a private in-memory store, returned by every command."""
    ctx = AppContext.create(config, qdrant_client=QdrantClient(":memory:"), http_client=http_client)
    ctx.close = lambda: None  # type: ignore[method-assign]
    for module in ("codevector.cli.index", "codevector.cli.search"):
        monkeypatch.setattr(f"{module}.build_context", lambda _config: ctx)
    return ctx
