"""Public package surface for dirtreediff.

Exports ``main`` for programmatic CLI invocation plus the two engine entry
points. The comparison engine lives in ``dirtreediff.tree_diff``.
"""

from __future__ import annotations

from .tree_diff import compare_subtrees, diff_top_level


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main", "compare_subtrees", "diff_top_level"]
