"""Custom exception hierarchy for keyshare.

All exceptions that cross layer boundaries must inherit from
:class:`KeyshareError`.  Raw ``subprocess`` and ``OSError`` failures
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
KeyshareError
├── MissingArtifactError
├── ToolNotFoundError
├── EnvironmentError
└── ToolFailedError
    ├── KeyExportError
    ├── SigningError
    └── UploadError
"""

from __future__ import annotations


class KeyshareError(Exception):
    """Base exception for all keyshare errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Artifact preconditions ------------------------------------------------

class MissingArtifactError(KeyshareError):
    """Raised when an expected intermediate file is absent or unreadable."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(KeyshareError):
    """Raised when a required runtime dependency is not available."""


class ToolNotFoundError(KeyshareError):
    """Raised when an external program cannot be located on PATH."""


# --- External tool failures ------------------------------------------------

class ToolFailedError(KeyshareError):
    """Raised when an external program exits unsuccessfully.

    The tool's own exit status is preserved so that the CLI can
    terminate with it.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_status: int = 1,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.exit_status: int = exit_status if exit_status > 0 else 1


class KeyExportError(ToolFailedError):
    """Raised when the key service fails to list or export a key."""


class SigningError(ToolFailedError):
    """Raised when the detached signature cannot be produced."""


class UploadError(ToolFailedError):
    """Raised when copying the artifacts to the remote host fails."""
