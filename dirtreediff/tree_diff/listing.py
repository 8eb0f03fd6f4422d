"""Sorted filesystem traversal shared by both sides of a tree comparison."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

from .types import Entry, EntryKind, TraversalError

logger = logging.getLogger(__name__)

NameKey = Callable[[str], bytes]


def name_key(name: str) -> bytes:
    """Return the byte-wise sort key for one path component."""
    return os.fsencode(name)


def entry_sort_key(entry: Entry, key: NameKey = name_key) -> tuple[bytes, ...]:
    """Return the merge key for ``entry``: ``key`` applied to each relative component.

    Lexicographic order on this tuple is exactly the pre-order of a walk whose
    siblings are sorted by the same ``key``, so flattened recursive walks and
    single-depth listings can both be merge-joined with it.
    """
    return tuple(key(part) for part in entry.relative)


def kind_from_mode(mode: int) -> EntryKind:
    """Map an ``st_mode`` value to an ``EntryKind``."""
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIR
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    return EntryKind.OTHER


def _child_kind(child: os.DirEntry) -> EntryKind:
    if child.is_symlink():
        return EntryKind.SYMLINK
    if child.is_dir(follow_symlinks=False):
        return EntryKind.DIR
    if child.is_file(follow_symlinks=False):
        return EntryKind.FILE
    return EntryKind.OTHER


def list_sorted_children(
    directory: Entry,
    key: NameKey = name_key,
) -> tuple[list[Entry | TraversalError], TraversalError | None]:
    """List children of ``directory`` sorted by ``key`` applied to their names.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory itself cannot be read. A child whose kind cannot be determined
    appears as a ``TraversalError`` at its sorted position. The directory
    handle is closed before this returns.
    """
    try:
        with os.scandir(directory.path) as entries:
            raw_children = sorted(entries, key=lambda child: key(child.name))
    except OSError as exc:
        logger.debug("cannot read directory %s: %s", directory.path, exc)
        return [], TraversalError(directory.path, exc)

    children: list[Entry | TraversalError] = []
    for child in raw_children:
        child_path = directory.path / child.name
        try:
            kind = _child_kind(child)
        except OSError as exc:
            logger.debug("cannot classify %s: %s", child_path, exc)
            children.append(TraversalError(child_path, exc))
            continue
        children.append(
            Entry(
                path=child_path,
                relative=directory.relative + (child.name,),
                kind=kind,
            )
        )
    return children, None


def _walk(
    root_entry: Entry,
    min_depth: int,
    max_depth: int | None,
    key: NameKey,
) -> Iterator[Entry | TraversalError]:
    # One iterator of pending siblings per open directory level; the top of
    # the stack is the directory currently being walked.
    stack: list[Iterator[Entry | TraversalError]] = [iter((root_entry,))]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue
        if isinstance(item, TraversalError):
            yield item
            continue

        if item.depth >= min_depth:
            yield item
        if item.kind is not EntryKind.DIR:
            continue
        if max_depth is not None and item.depth >= max_depth:
            continue

        children, scan_error = list_sorted_children(item, key)
        if scan_error is not None:
            yield scan_error
            continue
        stack.append(iter(children))


def walk_sorted(
    root: Path | str,
    min_depth: int = 0,
    max_depth: int | None = None,
    *,
    key: NameKey = name_key,
) -> Iterator[Entry | TraversalError]:
    """Walk ``root`` in pre-order with siblings sorted by ``key``.

    The root is depth 0 and is resolved through symlinks; descendants are
    never followed through symlinks. Only entries with
    ``min_depth <= depth <= max_depth`` are yielded (``max_depth=None`` walks
    everything). Read failures are yielded as ``TraversalError`` items in
    place of the entry and the walk carries on.

    Arguments are validated eagerly; the traversal itself is lazy.
    """
    if min_depth < 0:
        raise ValueError("min_depth must be >= 0")
    if max_depth is not None and max_depth < min_depth:
        raise ValueError("max_depth must be >= min_depth")
    return _walk_root(Path(root), min_depth, max_depth, key)


def _walk_root(
    root: Path,
    min_depth: int,
    max_depth: int | None,
    key: NameKey,
) -> Iterator[Entry | TraversalError]:
    try:
        root_kind = kind_from_mode(os.stat(root).st_mode)
    except OSError as exc:
        logger.debug("cannot stat root %s: %s", root, exc)
        yield TraversalError(root, exc)
        return
    yield from _walk(Entry(path=root, relative=(), kind=root_kind), min_depth, max_depth, key)


__all__ = [
    "NameKey",
    "name_key",
    "entry_sort_key",
    "kind_from_mode",
    "list_sorted_children",
    "walk_sorted",
]
