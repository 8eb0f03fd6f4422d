"""Two-way merge-join over independently sorted traversal streams."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .listing import NameKey, entry_sort_key, name_key
from .types import Entry, TraversalError

Item = Entry | TraversalError
JoinPair = tuple[Item | None, Item | None]


class _Cursor:
    """One-item lookahead over a traversal stream."""

    def __init__(self, items: Iterable[Item]) -> None:
        self._items = iter(items)
        self.pending: Item | None = next(self._items, None)

    def advance(self) -> None:
        self.pending = next(self._items, None)


def merge_join(
    left: Iterable[Item],
    right: Iterable[Item],
    key: NameKey = name_key,
) -> Iterator[JoinPair]:
    """Pair up entries of two streams walked with the same sibling ``key``.

    Entries are compared by ``entry_sort_key(entry, key)``, so the merge order
    always agrees with the order both walks produced. Yields ``(left, right)``
    when keys are equal, ``(left, None)`` or ``(None, right)`` when only one
    side holds a key, and an error item alone on its side, checking the left
    side first. Only the sides that produced
    the yielded pair are advanced, and only once the consumer asks for the
    next pair.
    """
    left_cursor = _Cursor(left)
    right_cursor = _Cursor(right)
    while True:
        left_item = left_cursor.pending
        right_item = right_cursor.pending

        if isinstance(left_item, TraversalError):
            yield left_item, None
            left_cursor.advance()
        elif isinstance(right_item, TraversalError):
            yield None, right_item
            right_cursor.advance()
        elif left_item is None and right_item is None:
            return
        elif right_item is None:
            yield left_item, None
            left_cursor.advance()
        elif left_item is None:
            yield None, right_item
            right_cursor.advance()
        else:
            left_key = entry_sort_key(left_item, key)
            right_key = entry_sort_key(right_item, key)
            if left_key == right_key:
                yield left_item, right_item
                left_cursor.advance()
                right_cursor.advance()
            elif left_key < right_key:
                yield left_item, None
                left_cursor.advance()
            else:
                yield None, right_item
                right_cursor.advance()


__all__ = ["JoinPair", "merge_join"]
