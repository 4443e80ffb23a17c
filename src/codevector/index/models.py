"""Data models for the indexing and search pipelines.

Walker and pipeline steps report what happened to each file and chunk as
explicit outcome values; ``IndexingStats.record()`` folds them into the
run's counters.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

# Fixed namespace for point identities. Changing it re-keys every stored point.
IDENTITY_NAMESPACE = uuid.NAMESPACE_URL


def chunk_identity(file_path: str | Path, symbol_name: str) -> str:
    """Deterministic point id for a symbol.

    Depends only on the file path and symbol name, never on the source text
    or line span: an edited body overwrites its point, while a renamed or
    moved symbol gets a new point and leaves the old one in the store.
    """
    return str(uuid.uuid5(IDENTITY_NAMESPACE, f"{file_path}:{symbol_name}"))


@dataclass(frozen=True, slots=True)
class CodeChunk:
    """A function or method extracted from a source file."""

    file_path: str
    symbol_name: str
    start_line: int  # 1-based, inclusive
    end_line: int  # 1-based, inclusive
    source_text: str

    @property
    def identity(self) -> str:
        return chunk_identity(self.file_path, self.symbol_name)

    def payload(self, language: str) -> dict[str, Any]:
        """Fields stored alongside the vector."""
        return {
            "file_path": self.file_path,
            "symbol_name": self.symbol_name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "source_text": self.source_text,
            "language": language,
        }


# =============================================================================
# Walk outcomes
# =============================================================================


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A readable file with the target extension."""

    path: Path
    content: bytes


@dataclass(frozen=True, slots=True)
class SkippedFile:
    """A file ignored because its extension is not the target one."""

    path: Path


@dataclass(frozen=True, slots=True)
class FailedFile:
    """A file or directory that could not be read."""

    path: Path
    reason: str


WalkOutcome = SourceFile | SkippedFile | FailedFile


# =============================================================================
# Chunk outcomes
# =============================================================================

FailureStage = Literal["parse", "embed", "upsert"]


@dataclass(frozen=True, slots=True)
class ChunkIndexed:
    chunk: CodeChunk
    point_id: str


@dataclass(frozen=True, slots=True)
class ChunkFailed:
    file_path: str
    symbol_name: str | None
    stage: FailureStage
    reason: str


ChunkOutcome = ChunkIndexed | ChunkFailed


# =============================================================================
# Run statistics
# =============================================================================


@dataclass
class IndexingStats:
    """Counters for one indexing run."""

    files_scanned: int = 0
    chunks_indexed: int = 0
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False
    failures: list[ChunkFailed | FailedFile] = field(default_factory=list)

    def record(self, outcome: WalkOutcome | ChunkOutcome) -> None:
        if isinstance(outcome, SourceFile):
            self.files_scanned += 1
        elif isinstance(outcome, SkippedFile):
            self.skipped += 1
        elif isinstance(outcome, ChunkIndexed):
            self.chunks_indexed += 1
        else:
            self.failed += 1
            self.failures.append(outcome)

    def render(self) -> str:
        """Human-readable report returned to the tool caller."""
        headline = "Indexing Cancelled." if self.cancelled else "Indexing Complete."
        return (
            f"{headline}\n"
            f"Files Scanned: {self.files_scanned}\n"
            f"Functions Indexed: {self.chunks_indexed}\n"
            f"Failed/Skipped: {self.failed}/{self.skipped}"
        )


# =============================================================================
# Search
# =============================================================================


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A stored chunk matched by a query, with its similarity score."""

    file_path: str
    symbol_name: str
    start_line: int
    end_line: int
    source_text: str
    score: float

    @classmethod
    def from_payload(cls, payload: dict[str, Any], score: float) -> SearchHit:
        return cls(
            file_path=str(payload.get("file_path", "")),
            symbol_name=str(payload.get("symbol_name", "")),
            start_line=int(payload.get("start_line", 0)),
            end_line=int(payload.get("end_line", 0)),
            source_text=str(payload.get("source_text", "")),
            score=float(score),
        )
