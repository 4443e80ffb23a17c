"""codevector error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index (embedding, vector store, cancellation)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Index (3xxx)
    EMBEDDING_REQUEST_FAILED = 3001
    EMBEDDING_BAD_STATUS = 3002
    EMBEDDING_BAD_RESPONSE = 3003
    EMBEDDING_EMPTY = 3004
    STORE_BOOTSTRAP_FAILED = 3101
    STORE_UPSERT_FAILED = 3102
    STORE_QUERY_FAILED = 3103
    OPERATION_CANCELLED = 3201

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CodeVectorError(Exception):
    """Base error with structured context for tool responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'EMBEDDING_EMPTY')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeVectorError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class EmbeddingError(CodeVectorError):
    """The embedding service could not turn a text into a vector."""

    @classmethod
    def request_failed(cls, url: str, reason: str) -> "EmbeddingError":
        return cls(
            code=ErrorCode.EMBEDDING_REQUEST_FAILED,
            message=f"Failed to call embedding service at {url}: {reason}",
            retryable=True,
            details={"url": url, "reason": reason},
        )

    @classmethod
    def bad_status(cls, url: str, status_code: int) -> "EmbeddingError":
        return cls(
            code=ErrorCode.EMBEDDING_BAD_STATUS,
            message=f"Embedding service returned status: {status_code}",
            retryable=status_code >= 500,
            details={"url": url, "status_code": status_code},
        )

    @classmethod
    def bad_response(cls, reason: str) -> "EmbeddingError":
        return cls(
            code=ErrorCode.EMBEDDING_BAD_RESPONSE,
            message=f"Failed to decode embedding response: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def empty(cls, model: str) -> "EmbeddingError":
        return cls(
            code=ErrorCode.EMBEDDING_EMPTY,
            message="Embedding service returned an empty embeddings array",
            details={"model": model},
        )


class VectorStoreError(CodeVectorError):
    """Vector store calls that failed."""

    @classmethod
    def bootstrap_failed(cls, collection: str, reason: str) -> "VectorStoreError":
        return cls(
            code=ErrorCode.STORE_BOOTSTRAP_FAILED,
            message=f"Failed to ensure collection '{collection}': {reason}",
            details={"collection": collection, "reason": reason},
        )

    @classmethod
    def upsert_failed(cls, collection: str, point_id: str, reason: str) -> "VectorStoreError":
        return cls(
            code=ErrorCode.STORE_UPSERT_FAILED,
            message=f"Failed to upsert point {point_id} into '{collection}': {reason}",
            retryable=True,
            details={"collection": collection, "point_id": point_id, "reason": reason},
        )

    @classmethod
    def query_failed(cls, collection: str, reason: str) -> "VectorStoreError":
        return cls(
            code=ErrorCode.STORE_QUERY_FAILED,
            message=f"Vector store search error on '{collection}': {reason}",
            retryable=True,
            details={"collection": collection, "reason": reason},
        )


class OperationCancelledError(CodeVectorError):
    """An operation was cancelled or ran past its deadline."""

    @classmethod
    def cancelled(cls, operation: str, reason: str = "cancelled") -> "OperationCancelledError":
        return cls(
            code=ErrorCode.OPERATION_CANCELLED,
            message=f"{operation} {reason}",
            details={"operation": operation, "reason": reason},
        )


class InternalError(CodeVectorError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
