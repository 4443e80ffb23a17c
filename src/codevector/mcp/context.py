"""Application context for MCP handlers.

Single object passed to all tool handlers with access to the shared
clients and pipelines. Built once at startup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx
    from qdrant_client import QdrantClient

    from codevector.config.models import CodeVectorConfig
    from codevector.index.embedding import OllamaEmbeddingClient
    from codevector.index.pipeline import IndexingPipeline
    from codevector.index.search import SearchPipeline
    from codevector.index.store import VectorStore


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers.

    The Qdrant client and the embedding client are shared by every call;
    neither is locked, calls are strictly sequential within one invocation.
    """

    config: CodeVectorConfig
    store: VectorStore
    embedder: OllamaEmbeddingClient
    indexer: IndexingPipeline
    searcher: SearchPipeline

    @classmethod
    def create(
        cls,
        config: CodeVectorConfig,
        qdrant_client: QdrantClient | None = None,
        http_client: httpx.Client | None = None,
    ) -> AppContext:
        """Factory to create context with clients and pipelines wired together.

        Ensures the collection exists before returning.

        Args:
            config: Resolved configuration
            qdrant_client: Optional existing client (tests pass an in-memory one)
            http_client: Optional httpx client for the embedding service

        Raises:
            VectorStoreError: If the collection cannot be bootstrapped.
        """
        from codevector.index.embedding import OllamaEmbeddingClient
        from codevector.index.pipeline import IndexingPipeline
        from codevector.index.search import SearchPipeline
        from codevector.index.store import VectorStore, create_qdrant_client

        vs = config.vector_store
        store = VectorStore(
            qdrant_client or create_qdrant_client(vs),
            vs.collection,
            vs.dimension,
        )
        store.ensure_collection()

        embedder = OllamaEmbeddingClient(config.embedding, client=http_client)
        indexer = IndexingPipeline(
            embedder,
            store,
            extension=config.index.extension,
            language=config.index.language,
            excluded_dirs=config.index.excluded_dirs,
        )
        searcher = SearchPipeline(embedder, store, language=config.index.language)

        return cls(
            config=config,
            store=store,
            embedder=embedder,
            indexer=indexer,
            searcher=searcher,
        )

    def close(self) -> None:
        self.embedder.close()
        self.store.close()
