"""Command-line front door for dirtreediff.

Parses CLI options, validates both roots, and streams the diff table.
Scanning stops at the first traversal error, since later rows could blame
the wrong side.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .render import column_width, format_header, format_traversal_error, format_tree_diff
from .tree_diff import Matches, TraversalError, diff_top_level

logger = logging.getLogger(__name__)

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2
DEFAULT_DEPTH = 1
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirtreediff",
        description="Compare two directory trees entry by entry and report which entries match.",
    )
    parser.add_argument("left", help="Left root directory.")
    parser.add_argument("right", help="Right root directory.")
    parser.add_argument(
        "--depth",
        type=_positive_int,
        default=None,
        help=f"Depth of the entries to compare (default: saved default or {DEFAULT_DEPTH}).",
    )
    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument("--color", dest="color", action="store_true", help="Force colored labels.")
    color_group.add_argument("--no-color", dest="color", action="store_false", help="Disable colored labels.")
    parser.set_defaults(color=None)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics written to stderr.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the effective depth and any explicit color choice as defaults.",
    )
    return parser


def _resolve_color(explicit: bool | None) -> bool:
    """Pick color output: explicit flag, then saved preference, then TTY detection."""
    if explicit is not None:
        return explicit
    saved = config.load_color_enabled()
    if saved is not None:
        return saved
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _report_error(error: TraversalError, color: bool) -> int:
    for line in format_traversal_error(error, color=color):
        sys.stderr.write(line + "\n")
    return EXIT_TROUBLE


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, print the diff table, and return the exit status.

    Exit status is ``0`` when every entry matches, ``1`` when any entry
    differs or exists on one side only, and ``2`` on traversal errors or
    invalid arguments.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    left = Path(args.left)
    right = Path(args.right)
    for root in (left, right):
        if not root.exists():
            parser.error(f"path not found: {root}")
        if not root.is_dir():
            parser.error(f"not a directory: {root}")

    depth = args.depth or config.load_default_depth() or DEFAULT_DEPTH
    color = _resolve_color(args.color)
    if args.save_defaults:
        config.save_default_depth(depth)
        if args.color is not None:
            config.save_color_enabled(args.color)

    logger.info("comparing %s and %s at depth %d", left, right, depth)
    width = column_width(left, right, depth)
    sys.stdout.write(format_header(left, right, width) + "\n")
    status = EXIT_SAME
    for item in diff_top_level(left, right, depth):
        if isinstance(item, TraversalError):
            return _report_error(item, color)
        if not isinstance(item, Matches):
            status = EXIT_DIFFERENT
        row = format_tree_diff(item, width, left_root=left, right_root=right, color=color)
        sys.stdout.write(row + "\n")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
