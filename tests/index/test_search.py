"""Tests for index/search.py module."""

from __future__ import annotations

from pathlib import Path

import pytest

from codevector.config.constants import NO_RESULTS_MESSAGE
from codevector.core.cancellation import CancellationToken
from codevector.core.errors import EmbeddingError, OperationCancelledError
from codevector.index.models import SearchHit
from codevector.index.pipeline import IndexingPipeline
from codevector.index.search import SearchPipeline, format_hit, format_hits


def _hit(**overrides) -> SearchHit:
    fields = {
        "file_path": "/p/main.go",
        "symbol_name": "Foo",
        "start_line": 7,
        "end_line": 9,
        "source_text": "func Foo() {}",
        "score": 0.87654,
    }
    fields.update(overrides)
    return SearchHit(**fields)


class TestFormatHits:
    """Result rendering."""

    def test_single_hit_block(self) -> None:
        """Each hit renders as file, score and a fenced code block."""
        assert format_hit(_hit()) == (
            "File: /p/main.go (Line: 7)\nScore: 0.877\n```go\nfunc Foo() {}\n```\n\n---\n"
        )

    def test_hits_concatenate_in_order(self) -> None:
        out = format_hits([_hit(symbol_name="A", start_line=1), _hit(symbol_name="B", start_line=2)])

        assert out.index("(Line: 1)") < out.index("(Line: 2)")
        assert out.count("---\n") == 2

    def test_no_hits_is_sentinel(self) -> None:
        assert format_hits([]) == NO_RESULTS_MESSAGE == "No relevant code found."


class TestSearchPipeline:
    """Querying the indexed fixture project."""

    def test_empty_store_returns_sentinel(self, searcher: SearchPipeline) -> None:
        assert searcher.search("anything") == NO_RESULTS_MESSAGE

    def test_limit_one_returns_single_block_for_best_match(
        self,
        indexer: IndexingPipeline,
        searcher: SearchPipeline,
        go_project: Path,
        go_snippets: dict[str, str],
    ) -> None:
        """Searching with Foo's text and limit 1 yields just Foo's block."""
        indexer.index_project(go_project)

        output = searcher.search(go_snippets["Foo"], limit=1)

        assert output.count("File: ") == 1
        assert f"File: {(go_project / 'main.go').resolve()} (Line: 7)" in output
        assert go_snippets["Foo"] in output

    def test_hits_ordered_by_score(
        self, indexer: IndexingPipeline, searcher: SearchPipeline, go_project: Path, go_snippets
    ) -> None:
        indexer.index_project(go_project)

        hits = searcher.search_hits(go_snippets["Bar"], limit=20)

        assert [h.symbol_name for h in hits][0] == "Bar"
        assert hits[0].score >= hits[-1].score
        assert len(hits) == 2

    def test_embedding_failure_propagates(
        self, searcher: SearchPipeline, embedding_service
    ) -> None:
        embedding_service.fail_on.add("boom")

        with pytest.raises(EmbeddingError):
            searcher.search("boom")

    def test_cancelled_search_raises(self, searcher: SearchPipeline) -> None:
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            searcher.search("x", cancel=token)
