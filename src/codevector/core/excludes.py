"""Directory exclusion rules for source walking.

Tier 0 (hidden directories): any directory whose name starts with
HIDDEN_PREFIX is never traversed (.git, .idea, .cache, ...).

Tier 1 (DEFAULT_PRUNABLE_DIRS): dependency/vendor directories excluded by
default. Extra names can be added through ``index.excluded_dirs`` in config.

Generic build names (build, bin, pkg, out) are not pruned: Go modules keep
sources under them.
"""

from __future__ import annotations

from collections.abc import Iterable

HIDDEN_PREFIX = "."

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # Go / multi-language vendoring
        "vendor",
        # JavaScript/Node.js
        "node_modules",
        "bower_components",
        # Python
        "__pycache__",
        "venv",
        "site-packages",
    )
)


def is_hidden_dir(dirname: str) -> bool:
    return dirname.startswith(HIDDEN_PREFIX)


def build_pruned_dirs(extra: Iterable[str] = ()) -> frozenset[str]:
    """Combine the default prunable set with configured extras."""
    return DEFAULT_PRUNABLE_DIRS | frozenset(extra)


def should_prune(dirname: str, pruned: frozenset[str] = DEFAULT_PRUNABLE_DIRS) -> bool:
    """Check if a directory must not be descended into."""
    return is_hidden_dir(dirname) or dirname in pruned


__all__ = [
    "HIDDEN_PREFIX",
    "DEFAULT_PRUNABLE_DIRS",
    "build_pruned_dirs",
    "is_hidden_dir",
    "should_prune",
]
