"""Config module exports."""

from codevector.config.loader import load_config
from codevector.config.models import (
    CodeVectorConfig,
    EmbeddingConfig,
    IndexConfig,
    LoggingConfig,
    LogOutputConfig,
    TimeoutsConfig,
    VectorStoreConfig,
)

__all__ = [
    "load_config",
    "CodeVectorConfig",
    "EmbeddingConfig",
    "IndexConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "TimeoutsConfig",
    "VectorStoreConfig",
]
