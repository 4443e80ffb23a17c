"""Qdrant vector store access.

Builds the shared client, bootstraps the collection at startup and wraps
the three calls the pipelines make (upsert one point, nearest-neighbour
query, collection listing) so that client failures surface as
``VectorStoreError``.
"""

from __future__ import annotations

from typing import Any

import structlog
from qdrant_client import QdrantClient
from qdrant_client.models import Distance, PointStruct, VectorParams

from codevector.config.models import VectorStoreConfig
from codevector.core.cancellation import CancellationToken
from codevector.core.errors import VectorStoreError
from codevector.index.models import SearchHit

log = structlog.get_logger(__name__)


def create_qdrant_client(config: VectorStoreConfig, *, timeout: int | None = None) -> QdrantClient:
    """Build a client for the configured host.

    The configured port is the gRPC port when ``prefer_grpc`` is set
    (6334 by default), the REST port otherwise.
    """
    timeout = timeout or config.timeout_sec
    if config.prefer_grpc:
        return QdrantClient(
            host=config.host,
            grpc_port=config.port,
            prefer_grpc=True,
            timeout=timeout,
        )
    return QdrantClient(host=config.host, port=config.port, timeout=timeout)


def ensure_collection(
    client: QdrantClient,
    name: str,
    dimension: int,
    distance: Distance = Distance.COSINE,
) -> bool:
    """Create collection *name* if it does not exist yet.

    Returns:
        True if the collection was created, False if it already existed.

    Raises:
        VectorStoreError: If the existence check or the creation fails.
            Callers treat this as fatal.
    """
    try:
        if client.collection_exists(name):
            log.debug("collection_exists", collection=name)
            return False
        client.create_collection(
            collection_name=name,
            vectors_config=VectorParams(size=dimension, distance=distance),
        )
    except Exception as e:
        raise VectorStoreError.bootstrap_failed(name, str(e)) from e

    log.info("collection_created", collection=name, dimension=dimension, distance=str(distance))
    return True


def list_collections(client: QdrantClient) -> list[str]:
    """Names of all collections on the server, sorted."""
    response = client.get_collections()
    return sorted(c.name for c in response.collections)


class VectorStore:
    """One Qdrant collection used as the chunk index."""

    def __init__(self, client: QdrantClient, collection: str, dimension: int) -> None:
        self.client = client
        self.collection = collection
        self.dimension = dimension

    @classmethod
    def from_config(cls, config: VectorStoreConfig) -> VectorStore:
        return cls(create_qdrant_client(config), config.collection, config.dimension)

    def ensure_collection(self) -> bool:
        return ensure_collection(self.client, self.collection, self.dimension)

    def upsert_point(
        self,
        point_id: str,
        vector: list[float],
        payload: dict[str, Any],
        *,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Insert or overwrite the point with id *point_id*."""
        if cancel is not None:
            cancel.raise_if_cancelled("upsert")
        try:
            self.client.upsert(
                collection_name=self.collection,
                points=[PointStruct(id=point_id, vector=vector, payload=payload)],
                wait=True,
            )
        except Exception as e:
            raise VectorStoreError.upsert_failed(self.collection, point_id, str(e)) from e

    def query(
        self,
        vector: list[float],
        limit: int,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[SearchHit]:
        """Nearest neighbours of *vector*, best match first."""
        if cancel is not None:
            cancel.raise_if_cancelled("search")
        try:
            response = self.client.query_points(
                collection_name=self.collection,
                query=vector,
                limit=limit,
                with_payload=True,
            )
        except Exception as e:
            raise VectorStoreError.query_failed(self.collection, str(e)) from e
        return [SearchHit.from_payload(p.payload or {}, p.score) for p in response.points]

    def count(self) -> int:
        return self.client.count(collection_name=self.collection, exact=True).count

    def close(self) -> None:
        self.client.close()
