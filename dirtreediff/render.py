"""Side-by-side table rendering for tree diff results.

Rows are ``left  LABEL  right`` with both path cells padded to a shared
column width. Colors only wrap the label, so padding stays aligned whether
or not ANSI output is enabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pygments.console import ansiformat

from .tree_diff import Differs, LeftOnly, Matches, RightOnly, TraversalError, TreeDiff, walk_sorted

MATCHES_LABEL = "  MATCHES  "
DIFFERS_LABEL = "  DIFFERS  "
LEFT_ONLY_LABEL = "< ONLY IN  "
RIGHT_ONLY_LABEL = "  ONLY IN >"
HEADER_SEPARATOR = "-------"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffPalette:
    """Pygments console attribute strings (``color``, ``*bold*``, ``_underline_``)."""

    matches: str = "green"
    differs: str = "*red*"
    left_only: str = "yellow"
    right_only: str = "cyan"
    error: str = "*red*"


DEFAULT_PALETTE = DiffPalette()


def display_path(path: Path, root: Path | str | None = None) -> str:
    """Return ``path`` relative to ``root`` when possible, else verbatim."""
    if root is None:
        return str(path)
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)


def column_width(root_a: Path | str, root_b: Path | str, depth: int = 1) -> int:
    """Return the widest cell needed to show both roots and their entries.

    A side stops being measured at its first listing error. The same error
    comes back from the diff stream in its sorted position, after the rows
    that precede it.
    """
    width = max(len(str(root_a)), len(str(root_b)))
    for root in (root_a, root_b):
        for item in walk_sorted(root, depth, depth):
            if isinstance(item, TraversalError):
                logger.debug("column width: stopped measuring %s: %s", root, item)
                break
            width = max(width, len(display_path(item.path, root)))
    return width


def format_header(root_a: Path | str, root_b: Path | str, width: int) -> str:
    return f"{str(root_a):<{width}}    {HEADER_SEPARATOR}    {str(root_b):<{width}}"


def format_tree_diff(
    item: TreeDiff,
    width: int,
    *,
    left_root: Path | str | None = None,
    right_root: Path | str | None = None,
    color: bool = False,
    palette: DiffPalette = DEFAULT_PALETTE,
) -> str:
    """Format one diff item as a padded table row."""
    if isinstance(item, Differs):
        left = display_path(item.left, left_root)
        label, attr = DIFFERS_LABEL, palette.differs
        right = display_path(item.right, right_root)
    elif isinstance(item, Matches):
        left = display_path(item.left, left_root)
        label, attr = MATCHES_LABEL, palette.matches
        right = display_path(item.right, right_root)
    elif isinstance(item, LeftOnly):
        left = display_path(item.path, left_root)
        label, attr = LEFT_ONLY_LABEL, palette.left_only
        right = ""
    elif isinstance(item, RightOnly):
        left = ""
        label, attr = RIGHT_ONLY_LABEL, palette.right_only
        right = display_path(item.path, right_root)
    else:
        raise TypeError(f"not a tree diff item: {item!r}")

    if color:
        label = ansiformat(attr, label)
    return f"{left:<{width}}  {label}  {right:<{width}}"


def format_traversal_error(
    error: TraversalError,
    *,
    color: bool = False,
    palette: DiffPalette = DEFAULT_PALETTE,
) -> list[str]:
    """Return the lines reported when a scan has to stop on ``error``."""
    heading = "ERROR: Encountered an error while scanning directories:"
    if color:
        heading = ansiformat(palette.error, heading)
    return [heading, f"  {error}", "Aborting directory scan."]
