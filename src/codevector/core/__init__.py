"""Core module exports."""

from codevector.core.cancellation import CancellationToken
from codevector.core.errors import (
    CodeVectorError,
    ConfigError,
    EmbeddingError,
    ErrorCode,
    InternalError,
    OperationCancelledError,
    VectorStoreError,
)
from codevector.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Cancellation
    "CancellationToken",
    # Errors
    "CodeVectorError",
    "ConfigError",
    "EmbeddingError",
    "ErrorCode",
    "InternalError",
    "OperationCancelledError",
    "VectorStoreError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
