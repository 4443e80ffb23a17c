"""Search pipeline: embed a query, retrieve nearest chunks, format them."""

from __future__ import annotations

import structlog

from codevector.config.constants import NO_RESULTS_MESSAGE, SEARCH_DEFAULT_LIMIT
from codevector.core.cancellation import CancellationToken
from codevector.index.embedding import OllamaEmbeddingClient
from codevector.index.models import SearchHit
from codevector.index.store import VectorStore

log = structlog.get_logger(__name__)


def format_hit(hit: SearchHit, language: str = "go") -> str:
    return (
        f"File: {hit.file_path} (Line: {hit.start_line})\n"
        f"Score: {hit.score:.3f}\n"
        f"```{language}\n"
        f"{hit.source_text}\n"
        f"```\n\n---\n"
    )


def format_hits(hits: list[SearchHit], language: str = "go") -> str:
    """Render hits in store order, or the no-results sentinel."""
    if not hits:
        return NO_RESULTS_MESSAGE
    return "".join(format_hit(hit, language) for hit in hits)


class SearchPipeline:
    """Natural-language search over the chunk index."""

    def __init__(
        self,
        embedder: OllamaEmbeddingClient,
        store: VectorStore,
        *,
        language: str = "go",
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.language = language

    def search_hits(
        self,
        query: str,
        limit: int = SEARCH_DEFAULT_LIMIT,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[SearchHit]:
        """Matches for *query*, ordered by descending similarity.

        Raises:
            EmbeddingError: If the query could not be embedded.
            VectorStoreError: If the nearest-neighbour query failed.
            OperationCancelledError: If *cancel* fired first.
        """
        vector = self.embedder.embed(query, cancel=cancel)
        hits = self.store.query(vector, limit, cancel=cancel)
        log.info("search_complete", limit=limit, hits=len(hits))
        return hits

    def search(
        self,
        query: str,
        limit: int = SEARCH_DEFAULT_LIMIT,
        *,
        cancel: CancellationToken | None = None,
    ) -> str:
        """Formatted matches for *query*, or ``NO_RESULTS_MESSAGE``."""
        return format_hits(self.search_hits(query, limit, cancel=cancel), self.language)
