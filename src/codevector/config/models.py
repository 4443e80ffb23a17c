"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Nested environment variables (CODEVECTOR__SECTION__KEY)
3. Flat environment variables (OLLAMA_URL, EMBEDDING_MODEL, QDRANT_HOST, QDRANT_PORT)
4. Global YAML (~/.config/codevector/config.yaml)
5. Built-in defaults (this file)

Examples:
    CODEVECTOR__LOGGING__LEVEL=DEBUG
    CODEVECTOR__VECTOR_STORE__DIMENSION=1024
    QDRANT_PORT=6334
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from codevector.config.constants import PORT_MAX, PORT_MIN

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CODEVECTOR__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every embed and upsert call.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class EmbeddingConfig(BaseModel):
    """Embedding service configuration.

    Env vars:
        OLLAMA_URL / CODEVECTOR__EMBEDDING__URL: Embedding endpoint
        EMBEDDING_MODEL / CODEVECTOR__EMBEDDING__MODEL: Model identifier
    """

    url: str = Field(
        default="http://localhost:11434/api/embed",
        description="Full URL of the embedding endpoint (Ollama /api/embed wire format).",
    )
    model: str = Field(
        default="qwen3-embedding:8b",
        description="Embedding model identifier sent with every request.",
    )
    timeout_sec: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout. Large models may need more on first load.",
    )


class VectorStoreConfig(BaseModel):
    """Qdrant connection and collection configuration.

    Env vars:
        QDRANT_HOST / CODEVECTOR__VECTOR_STORE__HOST: Qdrant host
        QDRANT_PORT / CODEVECTOR__VECTOR_STORE__PORT: Qdrant port (gRPC when prefer_grpc)
    """

    host: str = Field(default="localhost")
    port: int = Field(
        default=6334,
        description="6334 is Qdrant's default gRPC port, 6333 its REST port.",
    )
    prefer_grpc: bool = Field(default=True)
    collection: str = Field(default="codebase_index")
    dimension: int = Field(
        default=4096,
        gt=0,
        description="Vector size. Must match the embedding model's output dimension exactly.",
    )
    timeout_sec: int = Field(default=30, gt=0)
    check_timeout_sec: int = Field(
        default=3,
        gt=0,
        description="Timeout for the connectivity check.",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (PORT_MIN <= v <= PORT_MAX):
            raise ValueError(f"Port must be {PORT_MIN}-{PORT_MAX}, got {v}")
        return v


class IndexConfig(BaseModel):
    """Source selection configuration.

    Env vars:
        CODEVECTOR__INDEX__EXCLUDED_DIRS: JSON list of extra directory names to prune
    """

    extension: str = Field(default=".go", description="Source file extension to parse.")
    language: str = Field(default="go", description="Language tag stored with every point.")
    excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Directory names pruned in addition to hidden and vendor directories.",
    )

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        return v if v.startswith(".") else f".{v}"


class TimeoutsConfig(BaseModel):
    """Operation-level deadlines for tool invocations.

    Env vars:
        CODEVECTOR__TIMEOUTS__INDEX_SEC: Deadline for one index_project call
        CODEVECTOR__TIMEOUTS__SEARCH_SEC: Deadline for one codebase_search call
    """

    index_sec: float | None = Field(
        default=None,
        description="Deadline for a whole indexing run. None means unbounded; "
        "individual requests are still bounded by their own timeouts.",
    )
    search_sec: float = Field(default=60.0, gt=0)


class CodeVectorConfig(BaseModel):
    """Root configuration for codevector."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    vector_store: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
