"""Run external programs and map their failures to keyshare errors.

This module is the only place in the codebase that calls
:func:`subprocess.run`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from keyshare.exceptions import ToolFailedError, ToolNotFoundError

logger = logging.getLogger(__name__)


def run_tool(
    argv: Sequence[str],
    *,
    error_cls: type[ToolFailedError],
    action: str,
    capture: bool = True,
) -> str:
    """Run *argv* to completion and return its standard output.

    When *capture* is false the program inherits the terminal so that
    passphrase and host-key prompts reach the user; the returned string
    is then empty.

    Raises
    ------
    ToolNotFoundError
        If the executable cannot be started.
    ToolFailedError
        An instance of *error_cls* carrying the program's exit status.
    """
    logger.debug("Running: %s", " ".join(argv))
    try:
        completed = subprocess.run(
            list(argv),
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(
            f"{argv[0]} is not installed or not on PATH.",
            hint="Run 'keyshare --doctor' to check your environment.",
        ) from exc
    except OSError as exc:
        raise error_cls(f"Could not {action}: {exc}") from exc

    if completed.returncode != 0:
        detail = (completed.stderr or "").strip() if capture else ""
        message = f"Could not {action} ({argv[0]} exited with status {completed.returncode})."
        if detail:
            message = f"{message}\n{detail}"
        raise error_cls(message, exit_status=completed.returncode)

    if not capture:
        return ""
    return completed.stdout or ""
