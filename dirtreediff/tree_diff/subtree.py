"""Whole-subtree equality check built on the flattened sorted walk.

Both subtrees are walked in full as one flat pre-order stream each and
merge-joined on relative path. The first structural, type, or content
difference decides the verdict; nothing past it is read.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .files import file_contents_equal
from .join import merge_join
from .listing import NameKey, name_key, walk_sorted
from .types import DiffResult, EntryKind, TraversalError

logger = logging.getLogger(__name__)


def compare_subtrees(
    path_a: Path | str,
    path_b: Path | str,
    *,
    key: NameKey = name_key,
) -> DiffResult:
    """Return whether the trees at ``path_a`` and ``path_b`` are identical.

    Identical means every descendant has the same relative name and kind, and
    every regular file has byte-identical contents. Symlinks and special
    files compare by kind only. The roots are compared as well, so two
    regular files can be passed directly. ``key`` orders siblings in both
    walks and in the merge.

    Raises ``TraversalError`` on the first listing or file read failure.
    """
    left = walk_sorted(path_a, key=key)
    right = walk_sorted(path_b, key=key)
    for left_item, right_item in merge_join(left, right, key):
        if isinstance(left_item, TraversalError):
            raise left_item
        if isinstance(right_item, TraversalError):
            raise right_item
        if left_item is None or right_item is None:
            present = left_item if left_item is not None else right_item
            logger.debug("%s: %s exists on one side only", path_a, present.path)
            return DiffResult.NOT_EQUAL
        if left_item.kind is not right_item.kind:
            logger.debug(
                "%s: kind mismatch at %s (%s vs %s)",
                path_a,
                left_item.path,
                left_item.kind.value,
                right_item.kind.value,
            )
            return DiffResult.NOT_EQUAL
        if left_item.kind is EntryKind.FILE:
            try:
                same = file_contents_equal(left_item.path, right_item.path)
            except OSError as exc:
                failed = Path(exc.filename) if exc.filename else left_item.path
                raise TraversalError(failed, exc) from exc
            if not same:
                logger.debug("%s: contents differ at %s", path_a, left_item.path)
                return DiffResult.NOT_EQUAL

    logger.debug("%s and %s are equal", path_a, path_b)
    return DiffResult.EQUAL


__all__ = ["compare_subtrees"]
