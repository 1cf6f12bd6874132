"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
External tool failures are the exception: the CLI exits with the
tool's own status (see :class:`~keyshare.exceptions.ToolFailedError`).
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error (upload skipped included)."""

GENERAL_ERROR: int = 1
"""A known KeyshareError was caught. User-facing message was displayed."""

USAGE_ERROR: int = 1
"""Missing key identifier or unrecognised option. Usage was printed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
