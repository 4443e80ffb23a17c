"""Structured error system for MCP tools.

Provides typed exceptions with error codes and remediation hints.
Enables agents to understand failures and self-correct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from fastmcp.exceptions import ToolError

from codevector.core.errors import (
    CodeVectorError,
    EmbeddingError,
    OperationCancelledError,
    VectorStoreError,
)


class MCPErrorCode(StrEnum):
    """Machine-readable error codes for MCP tool failures."""

    # Validation errors - agent should fix input
    INVALID_PARAMS = "INVALID_PARAMS"

    # Dependency errors - service may recover, call can be retried
    EMBEDDING_FAILED = "EMBEDDING_FAILED"
    STORE_ERROR = "STORE_ERROR"
    CANCELLED = "CANCELLED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


REMEDIATIONS: dict[MCPErrorCode, str] = {
    MCPErrorCode.INVALID_PARAMS: "Check the parameter values and call the tool again.",
    MCPErrorCode.EMBEDDING_FAILED: (
        "Check that the embedding service is running and the model is pulled "
        "(OLLAMA_URL, EMBEDDING_MODEL)."
    ),
    MCPErrorCode.STORE_ERROR: (
        "Check that Qdrant is reachable (QDRANT_HOST, QDRANT_PORT) and the "
        "collection exists; run 'codevector check'."
    ),
    MCPErrorCode.CANCELLED: "Retry with a narrower path or a shorter query.",
    MCPErrorCode.INTERNAL_ERROR: "Report this error; it is not caused by the input.",
}


@dataclass
class ErrorResponse:
    """Structured error response for MCP tools."""

    code: MCPErrorCode
    message: str
    remediation: str
    path: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "remediation": self.remediation,
            "path": self.path,
            "context": self.context,
        }


class MCPError(ToolError):
    """Base exception for MCP tool errors with structured response.

    Extends FastMCP's ToolError so that FastMCP passes it through instead
    of wrapping it in a generic ToolError.
    """

    def __init__(
        self,
        code: MCPErrorCode,
        message: str,
        remediation: str | None = None,
        path: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.remediation = remediation or REMEDIATIONS[code]
        self.path = path
        self.context = context

    def to_response(self) -> ErrorResponse:
        """Convert to ErrorResponse."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            remediation=self.remediation,
            path=self.path,
            context=self.context,
        )

    @classmethod
    def from_core(cls, error: CodeVectorError) -> MCPError:
        """Translate a core error into its tool-facing form."""
        if isinstance(error, EmbeddingError):
            code = MCPErrorCode.EMBEDDING_FAILED
        elif isinstance(error, VectorStoreError):
            code = MCPErrorCode.STORE_ERROR
        elif isinstance(error, OperationCancelledError):
            code = MCPErrorCode.CANCELLED
        else:
            code = MCPErrorCode.INTERNAL_ERROR
        return cls(
            code,
            error.message,
            error_code=error.code.value,
            retryable=error.retryable,
            details=error.details,
        )


# =============================================================================
# Specific Error Classes
# =============================================================================


class InvalidProjectPathError(MCPError):
    """Raised when the path to index is not an existing directory."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            code=MCPErrorCode.INVALID_PARAMS,
            message=f"Cannot index {path}: {reason}",
            remediation="Pass an absolute path to an existing project directory.",
            path=path,
        )
