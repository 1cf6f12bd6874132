"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class KeyService(Protocol):
    """Contract for key listing and export backends (e.g. GnuPG)."""

    def fingerprint(self, key_id: str) -> str:
        """Return the human-readable fingerprint listing for *key_id*.

        Raises
        ------
        KeyExportError
            When the backend cannot list the key.
        """
        ...  # pragma: no cover

    def export_public_key(self, key_id: str, destination: Path) -> None:
        """Write the ASCII-armored public key for *key_id* to *destination*.

        Raises
        ------
        KeyExportError
            When the export fails.
        """
        ...  # pragma: no cover


class SigningService(Protocol):
    """Contract for detached-signature backends."""

    def detach_sign(self, key_id: str, source: Path, signature: Path) -> None:
        """Sign *source* with the secret key of *key_id* into *signature*.

        The signature is ASCII-armored and detached.

        Raises
        ------
        SigningError
            When signing fails.
        """
        ...  # pragma: no cover


class RemoteCopyService(Protocol):
    """Contract for remote transfer backends (e.g. scp)."""

    def copy(self, paths: Sequence[Path], destination: str) -> None:
        """Copy every path in *paths* to *destination* in a single transfer.

        Raises
        ------
        UploadError
            When the transfer fails.
        """
        ...  # pragma: no cover


class Prompter(Protocol):
    """Contract for interactive line input.

    Implementations return the raw answer, possibly empty.  Cancelling
    the prompt must raise ``KeyboardInterrupt``.
    """

    def ask(self, message: str) -> str:
        ...  # pragma: no cover


class ArtifactStore(Protocol):
    """Contract for the filesystem operations performed on artifacts."""

    def is_readable(self, path: Path) -> bool: ...  # pragma: no cover

    def exists(self, path: Path) -> bool: ...  # pragma: no cover

    def write_text(self, path: Path, text: str) -> None: ...  # pragma: no cover

    def rename(self, source: Path, target: Path) -> None: ...  # pragma: no cover

    def append(self, source: Path, target: Path) -> int:
        """Append the bytes of *source* to *target*; return bytes copied."""
        ...  # pragma: no cover

    def remove(self, path: Path) -> None: ...  # pragma: no cover
