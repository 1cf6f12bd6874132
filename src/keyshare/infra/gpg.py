"""GnuPG backed key and signing services.

Implements :class:`~keyshare.core.protocols.KeyService` and
:class:`~keyshare.core.protocols.SigningService` structurally by
shelling out to ``gpg``.  The passphrase never passes through this
process: signing runs with the terminal attached so ``gpg-agent`` can
ask for it.
"""

from __future__ import annotations

from pathlib import Path

from keyshare.exceptions import KeyExportError, SigningError
from keyshare.infra.process import run_tool


class GpgKeyService:
    """Fingerprint listing and ASCII-armored export via ``gpg``."""

    def __init__(self, program: str = "gpg") -> None:
        self._program = program

    def fingerprint(self, key_id: str) -> str:
        return run_tool(
            [self._program, "--fingerprint", key_id],
            error_cls=KeyExportError,
            action=f"list the fingerprint of {key_id}",
        )

    def export_public_key(self, key_id: str, destination: Path) -> None:
        run_tool(
            [
                self._program,
                "--batch",
                "--yes",
                "--armor",
                "--output",
                str(destination),
                "--export",
                key_id,
            ],
            error_cls=KeyExportError,
            action=f"export public key {key_id}",
        )


class GpgSigningService:
    """Detached ASCII-armored signatures via ``gpg --detach-sign``.

    The key being published is also the signing key (``--local-user``).
    """

    def __init__(self, program: str = "gpg") -> None:
        self._program = program

    def detach_sign(self, key_id: str, source: Path, signature: Path) -> None:
        run_tool(
            [
                self._program,
                "--yes",
                "--local-user",
                key_id,
                "--armor",
                "--output",
                str(signature),
                "--detach-sign",
                str(source),
            ],
            error_cls=SigningError,
            action=f"sign {source.name}",
            capture=False,
        )
