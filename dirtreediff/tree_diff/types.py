"""Domain datatypes for directory-tree comparison results."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class EntryKind(enum.Enum):
    """Filesystem object kind observed during traversal (symlinks not followed)."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """One traversed filesystem object.

    ``relative`` holds the path components below the listing root, so the
    root itself has ``relative == ()`` and ``depth == 0``.
    """

    path: Path
    relative: tuple[str, ...]
    kind: EntryKind

    @property
    def depth(self) -> int:
        return len(self.relative)

    @property
    def name(self) -> str:
        return self.relative[-1] if self.relative else self.path.name


class DiffResult(enum.Enum):
    """Whole-subtree equality verdict."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"


@dataclass(frozen=True)
class LeftOnly:
    """Entry present only under the left root."""

    path: Path


@dataclass(frozen=True)
class RightOnly:
    """Entry present only under the right root."""

    path: Path


@dataclass(frozen=True)
class Matches:
    """Entry present under both roots with identical subtrees."""

    left: Path
    right: Path


@dataclass(frozen=True)
class Differs:
    """Entry present under both roots with differing subtrees."""

    left: Path
    right: Path


TreeDiff = LeftOnly | RightOnly | Matches | Differs


class TraversalError(Exception):
    """Access failure for ``path`` while listing directories or reading files.

    ``cause`` is the underlying ``OSError``. Once one of these is observed,
    results computed after it can no longer be trusted.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(path, cause)
        self.path = Path(path)
        self.cause = cause

    def __str__(self) -> str:
        reason = self.cause.strerror or str(self.cause)
        return f"failed while walking directories: {self.path}: {reason}"


__all__ = [
    "EntryKind",
    "Entry",
    "DiffResult",
    "LeftOnly",
    "RightOnly",
    "Matches",
    "Differs",
    "TreeDiff",
    "TraversalError",
]
