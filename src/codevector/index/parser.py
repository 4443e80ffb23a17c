"""Tree-sitter chunk extraction.

Parses one file and extracts function/method-level chunks with a
declarative query over the concrete syntax tree: each match captures the
declaration node (@func, the chunk boundary) and its identifier (@name,
the symbol name).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from codevector.index.models import CodeChunk

if TYPE_CHECKING:
    from tree_sitter import Language, Node, Query, Tree


# Function and method declarations per language (Tree-sitter query syntax)
CHUNK_QUERIES: dict[str, str] = {
    "go": """
        (function_declaration name: (identifier) @name) @func
        (method_declaration name: (field_identifier) @name) @func
    """,
}

# Language name -> grammar module providing ``language()``
GRAMMAR_MODULES: dict[str, str] = {
    "go": "tree_sitter_go",
}

CHUNK_CAPTURE = "func"
NAME_CAPTURE = "name"


def _node_text(node: Node, content: bytes) -> str:
    return content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


class ChunkCursor:
    """Finite, restartable sequence of chunks for one parsed file.

    Every ``iter()`` runs a fresh query cursor over the tree and yields one
    chunk per match until the matches are exhausted. A file without
    declarations yields nothing.
    """

    def __init__(self, tree: Tree, query: Query, content: bytes, file_path: str) -> None:
        self._tree = tree
        self._query = query
        self._content = content
        self._file_path = file_path

    def __iter__(self) -> Iterator[CodeChunk]:
        from tree_sitter import QueryCursor

        cursor = QueryCursor(self._query)
        for _pattern_idx, captures in cursor.matches(self._tree.root_node):
            chunk = self._to_chunk(captures)
            if chunk is not None:
                yield chunk

    def _to_chunk(self, captures: dict[str, list[Node]]) -> CodeChunk | None:
        decl_nodes = captures.get(CHUNK_CAPTURE)
        name_nodes = captures.get(NAME_CAPTURE)
        if not decl_nodes or not name_nodes:
            return None
        decl = decl_nodes[0]
        return CodeChunk(
            file_path=self._file_path,
            symbol_name=_node_text(name_nodes[0], self._content),
            # Tree rows are 0-based; editors count from 1
            start_line=decl.start_point[0] + 1,
            end_line=decl.end_point[0] + 1,
            source_text=_node_text(decl, self._content),
        )


@dataclass
class ChunkParser:
    """
    Tree-sitter parser producing function/method chunks for one language.

    Usage::

        parser = ChunkParser("go")
        for chunk in parser.chunks(content, "/abs/path/main.go"):
            ...
    """

    language: str = "go"
    _parser: Any = field(default=None, repr=False)
    _query: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.language not in CHUNK_QUERIES:
            raise ValueError(f"No chunk query for language: {self.language}")

        import tree_sitter

        ts_lang = self._get_language()
        self._parser = tree_sitter.Parser(ts_lang)
        self._query = tree_sitter.Query(ts_lang, CHUNK_QUERIES[self.language])

    def _get_language(self) -> Language:
        """Load the Tree-sitter language from its grammar package."""
        import importlib

        import tree_sitter

        module_name = GRAMMAR_MODULES[self.language]
        try:
            grammar = importlib.import_module(module_name)
        except ImportError as e:
            raise ValueError(f"Grammar not installed: {module_name}") from e
        return tree_sitter.Language(grammar.language())

    def parse(self, content: bytes) -> Tree:
        return self._parser.parse(content)

    def chunks(self, content: bytes, file_path: str) -> ChunkCursor:
        """Parse *content* and return a cursor over its declarations."""
        return ChunkCursor(self.parse(content), self._query, content, file_path)


class GoChunkParser(ChunkParser):
    """Chunk parser for Go source files."""

    def __init__(self) -> None:
        super().__init__(language="go")
