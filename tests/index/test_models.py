"""Tests for index/models.py module."""

from __future__ import annotations

import uuid
from pathlib import Path

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


def _chunk(symbol: str = "Foo", body: str = "func Foo() {}") -> CodeChunk:
    return CodeChunk(
        file_path="/p/main.go",
        symbol_name=symbol,
        start_line=1,
        end_line=1,
        source_text=body,
    )


class TestChunkIdentity:
    """Deterministic point identities."""

    def test_identity_is_uuid5_of_path_and_symbol(self) -> None:
        """Identity matches uuid5 over the URL namespace."""
        expected = str(uuid.uuid5(uuid.NAMESPACE_URL, "/p/main.go:Foo"))

        assert chunk_identity("/p/main.go", "Foo") == expected

    def test_identity_is_stable(self) -> None:
        """Same inputs always give the same identity."""
        assert chunk_identity("/a.go", "X") == chunk_identity(Path("/a.go"), "X")

    def test_identity_ignores_body(self) -> None:
        """Editing a function body keeps its identity."""
        assert _chunk(body="func Foo() {}").identity == _chunk(body="func Foo() { x() }").identity

    def test_identity_differs_by_symbol_and_path(self) -> None:
        """A rename or a move produces a new identity."""
        base = chunk_identity("/p/main.go", "Foo")

        assert chunk_identity("/p/main.go", "Foo2") != base
        assert chunk_identity("/p/other.go", "Foo") != base


class TestCodeChunk:
    def test_payload_has_all_fields(self) -> None:
        """Payload stores location, text and language."""
        payload = _chunk().payload("go")

        assert payload == {
            "file_path": "/p/main.go",
            "symbol_name": "Foo",
            "start_line": 1,
            "end_line": 1,
            "source_text": "func Foo() {}",
            "language": "go",
        }


class TestIndexingStats:
    """Folding outcomes into counters."""

    def test_record_counts_each_outcome_kind(self) -> None:
        """Each outcome type increments its own counter."""
        stats = IndexingStats()
        chunk = _chunk()

        stats.record(SourceFile(Path("/p/main.go"), b""))
        stats.record(SkippedFile(Path("/p/README.md")))
        stats.record(FailedFile(Path("/p/bad.go"), "denied"))
        stats.record(ChunkIndexed(chunk, chunk.identity))
        stats.record(ChunkFailed("/p/main.go", "Bar", "embed", "status 500"))

        assert (stats.files_scanned, stats.chunks_indexed) == (1, 1)
        assert (stats.failed, stats.skipped) == (2, 1)
        assert len(stats.failures) == 2

    def test_render_report(self) -> None:
        """Report uses the fixed four-line format."""
        stats = IndexingStats(files_scanned=1, chunks_indexed=2, failed=0, skipped=3)

        assert stats.render() == (
            "Indexing Complete.\nFiles Scanned: 1\nFunctions Indexed: 2\nFailed/Skipped: 0/3"
        )

    def test_render_cancelled_report(self) -> None:
        """A cancelled run changes only the headline."""
        stats = IndexingStats(files_scanned=1, cancelled=True)

        assert stats.render().splitlines()[0] == "Indexing Cancelled."
        assert "Files Scanned: 1" in stats.render()


class TestSearchHit:
    def test_from_payload(self) -> None:
        """Hits are built from stored payloads and scores."""
        hit = SearchHit.from_payload(_chunk().payload("go"), 0.5)

        assert hit.file_path == "/p/main.go"
        assert hit.symbol_name == "Foo"
        assert hit.score == 0.5

    def test_from_partial_payload_uses_defaults(self) -> None:
        """Missing payload keys fall back to empty values."""
        hit = SearchHit.from_payload({"file_path": "/x.go"}, 1)

        assert hit.start_line == 0
        assert hit.source_text == ""
