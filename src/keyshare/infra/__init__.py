"""Infrastructure layer — external system integration.

This layer wraps all interaction with GnuPG, scp and the local
filesystem.  Every raw ``subprocess`` or ``OSError`` failure must be
caught here and re-raised as a
:class:`~keyshare.exceptions.KeyshareError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from keyshare.infra.artifacts import LocalArtifactStore
from keyshare.infra.gpg import GpgKeyService, GpgSigningService
from keyshare.infra.scp import ScpRemoteCopy
from keyshare.infra.tool_detector import ToolStatus, detect_tool, require_tool

__all__: list[str] = [
    "GpgKeyService",
    "GpgSigningService",
    "LocalArtifactStore",
    "ScpRemoteCopy",
    "ToolStatus",
    "detect_tool",
    "require_tool",
]
