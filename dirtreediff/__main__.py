"""Module entrypoint for ``python -m dirtreediff``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and output happen in ``dirtreediff.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
