"""Index MCP tools - index_project, codebase_search handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import Field

from codevector.config.constants import SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT
from codevector.core.cancellation import CancellationToken
from codevector.core.errors import CodeVectorError
from codevector.mcp.errors import InvalidProjectPathError, MCPError
from codevector.mcp.registry import registry
from codevector.mcp.tools.base import BaseParams

if TYPE_CHECKING:
    from codevector.mcp.context import AppContext

T = TypeVar("T")


# =============================================================================
# Parameter Models
# =============================================================================


class IndexProjectParams(BaseParams):
    """Parameters for index_project."""

    path: str = Field(..., description="Absolute path to the project directory to index")


class CodebaseSearchParams(BaseParams):
    """Parameters for codebase_search."""

    query: str = Field(..., min_length=1, description="Natural language description of the code")
    limit: int = Field(
        default=SEARCH_DEFAULT_LIMIT,
        ge=1,
        le=SEARCH_MAX_LIMIT,
        description="Maximum number of matches",
    )


# =============================================================================
# Helpers
# =============================================================================


async def _run_blocking(fn: Callable[..., T], *args: Any, cancel: CancellationToken) -> T:
    """Run a pipeline call in a worker thread, translating core errors.

    If the awaiting task is cancelled the token fires too, so the worker
    stops before its next network call instead of running to completion.
    """
    try:
        return await asyncio.to_thread(fn, *args, cancel=cancel)
    except asyncio.CancelledError:
        cancel.cancel("cancelled by client")
        raise
    except CodeVectorError as e:
        raise MCPError.from_core(e) from e


def _resolve_project(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.exists():
        raise InvalidProjectPathError(raw, "path does not exist")
    if not path.is_dir():
        raise InvalidProjectPathError(raw, "path is not a directory")
    return path.resolve()


# =============================================================================
# Tool Handlers
# =============================================================================


@registry.register(
    "index_project",
    "Index a project directory for semantic search. Extracts every function and "
    "method, embeds it and stores it in the vector index. Re-running updates "
    "changed functions in place.",
    IndexProjectParams,
)
async def index_project(ctx: AppContext, params: IndexProjectParams) -> dict[str, Any]:
    """Walk, parse, embed and upsert a project."""
    root = _resolve_project(params.path)
    token = CancellationToken(ctx.config.timeouts.index_sec)
    stats = await _run_blocking(ctx.indexer.index_project, root, cancel=token)
    return {
        "report": stats.render(),
        "files_scanned": stats.files_scanned,
        "chunks_indexed": stats.chunks_indexed,
        "failed": stats.failed,
        "skipped": stats.skipped,
        "cancelled": stats.cancelled,
        "summary": f"{stats.chunks_indexed} functions from {stats.files_scanned} files",
    }


@registry.register(
    "codebase_search",
    "Search indexed code by meaning. Describe what the code does in natural "
    "language; returns the closest functions with file, line and score.",
    CodebaseSearchParams,
)
async def codebase_search(ctx: AppContext, params: CodebaseSearchParams) -> dict[str, Any]:
    """Embed the query and return formatted nearest matches."""
    from codevector.index.search import format_hits

    token = CancellationToken(ctx.config.timeouts.search_sec)
    hits = await _run_blocking(ctx.searcher.search_hits, params.query, params.limit, cancel=token)
    return {
        "results": format_hits(hits, ctx.searcher.language),
        "count": len(hits),
        "summary": f"{len(hits)} matches",
    }
