"""scp backed :class:`~keyshare.core.protocols.RemoteCopyService`."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from keyshare.exceptions import UploadError
from keyshare.infra.process import run_tool


class ScpRemoteCopy:
    """Copy files to ``user@host:dir`` in a single ``scp`` invocation.

    The terminal stays attached so scp can show its own prompts and
    error output.
    """

    def __init__(self, program: str = "scp") -> None:
        self._program = program

    def copy(self, paths: Sequence[Path], destination: str) -> None:
        run_tool(
            [self._program, *(str(path) for path in paths), destination],
            error_cls=UploadError,
            action=f"copy files to {destination}",
            capture=False,
        )
