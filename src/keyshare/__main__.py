"""Allow ``python -m keyshare`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m keyshare`` behaves identically to the ``keyshare``
console script.
"""

from __future__ import annotations

from keyshare.cli.app import cli

if __name__ == "__main__":
    cli()
