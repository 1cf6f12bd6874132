"""Infrastructure: external program detection and platform guidance.

This module locates the programs keyshare drives (``gpg``, ``scp``)
on the system PATH and provides platform-specific installation
guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from keyshare.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one program.

    Attributes
    ----------
    name : str
        Program name as probed (e.g. ``"gpg"``).
    found : bool
        Whether the program was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the program on the
        current platform.  Empty when it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system for *name*.

    Returns a :class:`ToolStatus` regardless of the outcome — the
    caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_PACKAGES: dict[str, dict[str, str]] = {
    "gpg": {"apt": "gnupg", "dnf": "gnupg2", "pacman": "gnupg", "brew": "gnupg"},
    "scp": {"apt": "openssh-client", "dnf": "openssh-clients", "pacman": "openssh"},
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    packages = _PACKAGES.get(name, {})
    system = platform.system().lower()
    if system == "linux":
        return (
            f"sudo apt install {packages.get('apt', name)}",
            f"sudo dnf install {packages.get('dnf', name)}",
            f"sudo pacman -S {packages.get('pacman', name)}",
        )
    if system == "darwin":
        if "brew" in packages:
            return (f"brew install {packages['brew']}",)
        return (f"{name} ships with macOS; check your PATH.",)
    if system == "windows":
        if name == "gpg":
            return ("winget install GnuPG.Gpg4win",)
        return ("Enable the OpenSSH Client optional feature in Settings.",)
    return (f"Install {name} with your system package manager.",)
