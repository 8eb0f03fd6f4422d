"""Byte-exact file content comparison."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CHUNK_SIZE = 64 * 1024


def file_contents_equal(
    path_a: Path | str,
    path_b: Path | str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Return whether two files hold byte-identical contents.

    Sizes are compared first and a mismatch returns ``False`` without opening
    either file. Otherwise both files are read in lockstep and the first
    differing chunk, or one file ending early, returns ``False``. Any
    ``OSError`` from stat, open, or read propagates.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be >= 1")
    if os.stat(path_a).st_size != os.stat(path_b).st_size:
        return False

    with open(path_a, "rb") as file_a, open(path_b, "rb") as file_b:
        while True:
            chunk_a = file_a.read(chunk_size)
            chunk_b = file_b.read(chunk_size)
            # Unequal lengths here mean a file changed size after the stat.
            if chunk_a != chunk_b:
                return False
            if not chunk_a:
                return True


__all__ = ["DEFAULT_CHUNK_SIZE", "file_contents_equal"]
