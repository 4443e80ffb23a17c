"""Indexing pipeline.

Walks a project, extracts function/method chunks, embeds each one and
upserts it under its deterministic identity. Per-file and per-chunk
failures become outcome values folded into ``IndexingStats``; nothing
below the run level aborts it. Only cancellation stops a run early, and it
still returns the partial counts.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from codevector.core.cancellation import CancellationToken
from codevector.core.errors import EmbeddingError, OperationCancelledError, VectorStoreError
from codevector.index.embedding import OllamaEmbeddingClient
from codevector.index.models import (
    ChunkFailed,
    ChunkIndexed,
    ChunkOutcome,
    CodeChunk,
    IndexingStats,
    SourceFile,
)
from codevector.index.parser import ChunkParser
from codevector.index.store import VectorStore
from codevector.index.walker import walk_sources

log = structlog.get_logger(__name__)


class IndexingPipeline:
    """Walk -> parse -> embed -> upsert, strictly one chunk at a time."""

    def __init__(
        self,
        embedder: OllamaEmbeddingClient,
        store: VectorStore,
        *,
        parser: ChunkParser | None = None,
        extension: str = ".go",
        language: str = "go",
        excluded_dirs: Iterable[str] = (),
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.language = language
        self.parser = parser or ChunkParser(language)
        self.extension = extension
        self.excluded_dirs = tuple(excluded_dirs)

    def index_project(
        self, root: Path | str, *, cancel: CancellationToken | None = None
    ) -> IndexingStats:
        """Index every matching file under *root*.

        Args:
            root: Directory to walk. Stored paths are absolute.
            cancel: Optional token; when it fires the run stops before the
                next embed or upsert and the stats are marked cancelled.

        Returns:
            Counters for the run. Call ``render()`` for the text report.
        """
        token = cancel or CancellationToken.none()
        root = Path(root).resolve()
        stats = IndexingStats()
        log.info("index_start", root=str(root), collection=self.store.collection)

        walk = walk_sources(root, extension=self.extension, excluded_dirs=self.excluded_dirs)
        try:
            for outcome in walk:
                token.raise_if_cancelled("indexing")
                stats.record(outcome)
                if isinstance(outcome, SourceFile):
                    for chunk_outcome in self._index_file(outcome, token):
                        stats.record(chunk_outcome)
        except OperationCancelledError as e:
            stats.cancelled = True
            log.warning("index_cancelled", root=str(root), reason=e.message)

        log.info(
            "index_complete",
            root=str(root),
            files_scanned=stats.files_scanned,
            chunks_indexed=stats.chunks_indexed,
            failed=stats.failed,
            skipped=stats.skipped,
            cancelled=stats.cancelled,
        )
        return stats

    def _index_file(self, source: SourceFile, token: CancellationToken) -> Iterator[ChunkOutcome]:
        file_path = str(source.path)
        try:
            chunks = list(self.parser.chunks(source.content, file_path))
        except Exception as e:
            log.warning("parse_failed", path=file_path, error=str(e))
            yield ChunkFailed(file_path, None, "parse", str(e))
            return

        log.debug("file_parsed", path=file_path, chunks=len(chunks))
        for chunk in chunks:
            yield self._index_chunk(chunk, token)

    def _index_chunk(self, chunk: CodeChunk, token: CancellationToken) -> ChunkOutcome:
        try:
            vector = self.embedder.embed(chunk.source_text, cancel=token)
        except EmbeddingError as e:
            log.warning(
                "embedding_failed",
                path=chunk.file_path,
                symbol=chunk.symbol_name,
                error=e.message,
            )
            return ChunkFailed(chunk.file_path, chunk.symbol_name, "embed", e.message)

        point_id = chunk.identity
        try:
            self.store.upsert_point(point_id, vector, chunk.payload(self.language), cancel=token)
        except VectorStoreError as e:
            log.warning(
                "upsert_failed",
                path=chunk.file_path,
                symbol=chunk.symbol_name,
                point_id=point_id,
                error=e.message,
            )
            return ChunkFailed(chunk.file_path, chunk.symbol_name, "upsert", e.message)

        return ChunkIndexed(chunk, point_id)
