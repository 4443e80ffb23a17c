"""FastMCP server creation and wiring.

Every registered ToolSpec becomes a FunctionTool with a flattened JSON
schema. Each call logs tool_start with its params and tool_complete with a
result summary; failures come back as a ToolResponse envelope rather than
a transport error.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from codevector.config.models import CodeVectorConfig
    from codevector.mcp.context import AppContext
    from codevector.mcp.registry import ToolSpec

log = structlog.get_logger(__name__)


class ToolResponse(BaseModel):
    """Standardized tool response envelope."""

    result: Any = None
    meta: dict[str, Any] = Field(default_factory=dict)

    success: bool
    error: str | None = None


def _extract_log_params(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Extract parameters for the tool_start log, truncating long values."""
    params: dict[str, Any] = {}
    for key, value in kwargs.items():
        if isinstance(value, str) and len(value) > 50:
            params[key] = value[:50] + "..."
        elif value is not None:
            params[key] = value
    return params


def _extract_result_summary(result: dict[str, Any]) -> dict[str, Any]:
    """Extract summary metrics from tool result for logging."""
    keys = ("count", "files_scanned", "chunks_indexed", "failed", "skipped", "cancelled")
    return {key: result[key] for key in keys if key in result}


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext with shared clients and pipelines

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from codevector.mcp.registry import registry

    # Import tools to trigger registration
    from codevector.mcp.tools import index  # noqa: F401

    log.info("mcp_server_creating", collection=context.store.collection)

    mcp = FastMCP(
        "codevector",
        instructions=(
            "Semantic code search. Call index_project on a project directory first, "
            "then codebase_search with a natural language description."
        ),
    )

    tool_count = 0
    for spec in registry.get_all():
        _wire_tool(mcp, spec, context)
        tool_count += 1

    log.info("mcp_server_created", tool_count=tool_count)

    return mcp


def _wire_tool(mcp: FastMCP, spec: ToolSpec, context: AppContext) -> None:
    """Wire a single tool spec to FastMCP.

    The handler takes the params model fields as keyword arguments and is
    advertised with the spec's flattened input schema.
    """
    from fastmcp.tools.tool import FunctionTool
    from pydantic import ValidationError

    from codevector.core.logging import clear_request_id, set_request_id
    from codevector.mcp.errors import MCPError

    params_model = spec.params_model
    spec_handler = spec.handler

    flat_schema = spec.input_schema

    async def handler(**kwargs: Any) -> dict[str, Any]:
        tool_name = spec.name
        request_id = set_request_id()
        start_time = time.perf_counter()

        log.info("tool_start", tool=tool_name, **_extract_log_params(kwargs))

        try:
            try:
                params = params_model(**kwargs)
            except ValidationError as e:
                errors = e.errors()
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.warning(
                    "tool_validation_error",
                    tool=tool_name,
                    error=errors[0]["msg"] if errors else str(e),
                    elapsed_ms=elapsed_ms,
                )
                return ToolResponse(
                    success=False,
                    result=None,
                    error=f"Validation error: {errors[0]['msg'] if errors else str(e)}",
                    meta={
                        "request_id": request_id,
                        "error_type": "validation",
                        "validation_errors": [
                            {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                            for err in errors[:5]
                        ],
                    },
                ).model_dump()

            try:
                result_data = await spec_handler(context, params)
            except MCPError as e:
                # Expected error - log warning, no traceback
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.warning(
                    "tool_error",
                    tool=tool_name,
                    error_code=e.code.value,
                    error=e.message,
                    path=e.path,
                    elapsed_ms=elapsed_ms,
                )
                return ToolResponse(
                    success=False,
                    result=None,
                    error=e.message,
                    meta={"request_id": request_id, "error": e.to_response().to_dict()},
                ).model_dump()
            except Exception as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.error("tool_internal_error", tool=tool_name, error=str(e), elapsed_ms=elapsed_ms)
                log.debug("tool_internal_error_traceback", tool=tool_name, exc_info=True)
                return ToolResponse(
                    success=False,
                    result=None,
                    error=str(e),
                    meta={"request_id": request_id, "error_type": "internal"},
                ).model_dump()

            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            summary = _extract_result_summary(result_data)
            log.info("tool_complete", tool=tool_name, elapsed_ms=elapsed_ms, **summary)

            return ToolResponse(
                success=True,
                result=result_data,
                meta={"request_id": request_id, "timestamp": int(time.time() * 1000)},
            ).model_dump()
        finally:
            clear_request_id()

    tool = FunctionTool(
        name=spec.name,
        description=spec.description,
        parameters=flat_schema,
        fn=handler,
    )

    mcp.add_tool(tool)


def run_server(config: CodeVectorConfig) -> None:
    """Create and run the MCP server on stdio.

    Raises:
        VectorStoreError: If the collection cannot be bootstrapped; the
            server does not start.
    """
    from codevector.core.logging import configure_logging
    from codevector.mcp.context import AppContext

    # stdout carries the MCP frames, so logging never writes there
    configure_logging(config=config.logging)

    log.info(
        "mcp_server_starting",
        embedding_url=config.embedding.url,
        model=config.embedding.model,
        qdrant_host=config.vector_store.host,
        qdrant_port=config.vector_store.port,
        collection=config.vector_store.collection,
    )

    context = AppContext.create(config)
    mcp = create_mcp_server(context)

    log.info("mcp_server_running", transport="stdio")
    try:
        mcp.run(transport="stdio")
    finally:
        context.close()
