"""Source tree walking.

Yields one outcome per file under a root directory. Hidden and vendor
directories are pruned before descent; files with another extension are
reported as skipped without being read; unreadable files are reported as
failed and the walk carries on.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from codevector.core.excludes import DEFAULT_PRUNABLE_DIRS, build_pruned_dirs, should_prune
from codevector.index.models import FailedFile, SkippedFile, SourceFile, WalkOutcome

log = structlog.get_logger(__name__)


class SourceWalk:
    """Restartable walk over a directory tree.

    Each ``iter()`` starts a fresh traversal, so the same walk can be
    consumed more than once. Entries are visited in sorted order.
    """

    def __init__(
        self,
        root: Path,
        *,
        extension: str = ".go",
        pruned_dirs: frozenset[str] = DEFAULT_PRUNABLE_DIRS,
    ) -> None:
        self.root = root
        self.extension = extension
        self.pruned_dirs = pruned_dirs

    def __iter__(self) -> Iterator[WalkOutcome]:
        listing_errors: list[OSError] = []

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=listing_errors.append):
            # Drain directory errors raised since the previous step
            while listing_errors:
                yield self._listing_failure(listing_errors.pop(0))

            dirnames[:] = sorted(d for d in dirnames if not should_prune(d, self.pruned_dirs))
            for filename in sorted(filenames):
                yield self._visit(Path(dirpath) / filename)

        while listing_errors:
            yield self._listing_failure(listing_errors.pop(0))

    def _visit(self, path: Path) -> WalkOutcome:
        if path.suffix != self.extension:
            return SkippedFile(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            log.warning("file_read_failed", path=str(path), error=str(e))
            return FailedFile(path, str(e))
        return SourceFile(path, content)

    @staticmethod
    def _listing_failure(error: OSError) -> FailedFile:
        path = Path(error.filename) if error.filename else Path()
        log.warning("directory_read_failed", path=str(path), error=str(error))
        return FailedFile(path, str(error))


def walk_sources(
    root: Path,
    *,
    extension: str = ".go",
    excluded_dirs: Iterable[str] = (),
) -> SourceWalk:
    """Create a walk over *root* for files ending in *extension*."""
    return SourceWalk(
        root,
        extension=extension,
        pruned_dirs=build_pruned_dirs(excluded_dirs),
    )
