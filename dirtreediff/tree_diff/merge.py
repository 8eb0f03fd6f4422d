"""Lazy top-level classification of two directory trees."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .join import JoinPair, merge_join
from .listing import NameKey, name_key, walk_sorted
from .subtree import compare_subtrees
from .types import DiffResult, Differs, LeftOnly, Matches, RightOnly, TraversalError, TreeDiff

logger = logging.getLogger(__name__)


def diff_top_level(
    root_a: Path | str,
    root_b: Path | str,
    depth: int = 1,
    *,
    key: NameKey = name_key,
) -> Iterator[TreeDiff | TraversalError]:
    """Classify every entry found at ``depth`` under either root.

    Items arrive in ascending relative-path order: ``LeftOnly``/``RightOnly``
    for entries on one side, ``Matches``/``Differs`` for entries on both
    sides after a full subtree comparison. Access failures are yielded as
    ``TraversalError`` items; once one is seen, stop consuming, since later
    items may blame the wrong side. ``key`` is the sibling order shared by
    every walk and merge involved.
    """
    if depth < 1:
        raise ValueError("depth must be >= 1")
    left = walk_sorted(root_a, depth, depth, key=key)
    right = walk_sorted(root_b, depth, depth, key=key)
    return _classify(merge_join(left, right, key), key)


def _classify(pairs: Iterator[JoinPair], key: NameKey) -> Iterator[TreeDiff | TraversalError]:
    for left, right in pairs:
        if isinstance(left, TraversalError):
            yield left
        elif isinstance(right, TraversalError):
            yield right
        elif right is None:
            yield LeftOnly(left.path)
        elif left is None:
            yield RightOnly(right.path)
        else:
            try:
                verdict = compare_subtrees(left.path, right.path, key=key)
            except TraversalError as exc:
                logger.debug("subtree comparison of %s failed: %s", left.path, exc)
                yield exc
                continue
            if verdict is DiffResult.EQUAL:
                yield Matches(left.path, right.path)
            else:
                yield Differs(left.path, right.path)


__all__ = ["diff_top_level"]
