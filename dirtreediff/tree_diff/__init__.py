"""Comparison engine for pairs of directory trees.

This package contains the non-UI comparison primitives:
- entry/result datatypes and the traversal error type
- sorted lazy directory walks sharing one ordering function
- byte-exact file comparison
- a two-way merge-join used by both subtree equality and top-level diffing
"""

from __future__ import annotations

from .types import (
    DiffResult,
    Differs,
    Entry,
    EntryKind,
    LeftOnly,
    Matches,
    RightOnly,
    TraversalError,
    TreeDiff,
)
from .listing import NameKey, entry_sort_key, list_sorted_children, name_key, walk_sorted
from .files import DEFAULT_CHUNK_SIZE, file_contents_equal
from .join import merge_join
from .subtree import compare_subtrees
from .merge import diff_top_level

__all__ = [
    "DiffResult",
    "Differs",
    "Entry",
    "EntryKind",
    "LeftOnly",
    "Matches",
    "RightOnly",
    "TraversalError",
    "TreeDiff",
    "NameKey",
    "entry_sort_key",
    "list_sorted_children",
    "name_key",
    "walk_sorted",
    "DEFAULT_CHUNK_SIZE",
    "file_contents_equal",
    "merge_join",
    "compare_subtrees",
    "diff_top_level",
]
