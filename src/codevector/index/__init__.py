"""Index module - chunk extraction, embedding and vector storage.

This module provides:
- Source walking with directory pruning and extension filtering
- Tree-sitter extraction of function/method chunks
- Embedding through an Ollama-compatible HTTP endpoint
- Qdrant storage keyed by deterministic chunk identities
- Indexing and search pipelines over the above
"""

from codevector.index.embedding import OllamaEmbeddingClient
from codevector.index.models import (
    ChunkFailed,
    ChunkIndexed,
    CodeChunk,
    FailedFile,
    IndexingStats,
    SearchHit,
    SkippedFile,
    SourceFile,
    chunk_identity,
)
from codevector.index.parser import ChunkCursor, ChunkParser, GoChunkParser
from codevector.index.pipeline import IndexingPipeline
from codevector.index.search import SearchPipeline, format_hits
from codevector.index.store import VectorStore, create_qdrant_client, ensure_collection
from codevector.index.walker import SourceWalk, walk_sources

__all__ = [
    # Models
    "ChunkFailed",
    "ChunkIndexed",
    "CodeChunk",
    "FailedFile",
    "IndexingStats",
    "SearchHit",
    "SkippedFile",
    "SourceFile",
    "chunk_identity",
    # Components
    "ChunkCursor",
    "ChunkParser",
    "GoChunkParser",
    "OllamaEmbeddingClient",
    "SourceWalk",
    "VectorStore",
    "create_qdrant_client",
    "ensure_collection",
    "walk_sources",
    # Pipelines
    "IndexingPipeline",
    "SearchPipeline",
    "format_hits",
]
