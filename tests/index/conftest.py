"""Shared fixtures for index tests."""

from __future__ import annotations

import httpx
import pytest
from qdrant_client import QdrantClient

from codevector.config.models import CodeVectorConfig
from codevector.index.embedding import OllamaEmbeddingClient
from codevector.index.pipeline import IndexingPipeline
from codevector.index.search import SearchPipeline
from codevector.index.store import VectorStore


@pytest.fixture
def store(qdrant: QdrantClient, config: CodeVectorConfig) -> VectorStore:
    """Bootstrapped in-memory store."""
    vs = VectorStore(qdrant, config.vector_store.collection, config.vector_store.dimension)
    vs.ensure_collection()
    return vs


@pytest.fixture
def embedder(config: CodeVectorConfig, http_client: httpx.Client) -> OllamaEmbeddingClient:
    return OllamaEmbeddingClient(config.embedding, client=http_client)


@pytest.fixture
def indexer(embedder: OllamaEmbeddingClient, store: VectorStore) -> IndexingPipeline:
    return IndexingPipeline(embedder, store)


@pytest.fixture
def searcher(embedder: OllamaEmbeddingClient, store: VectorStore) -> SearchPipeline:
    return SearchPipeline(embedder, store)
