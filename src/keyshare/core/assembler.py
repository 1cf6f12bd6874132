"""Core key assembler — preamble plus exported key becomes the output file.

Guarantees
----------
* The output contains the preamble bytes followed by the key bytes.
* The pending preamble is consumed by a rename, so assembly happens at
  most once per preamble.
* No temporary artifact survives a successful run.
* A leftover export from an interrupted run is discarded before exporting.
"""

from __future__ import annotations

import logging

from keyshare.core.models import ArtifactPaths
from keyshare.core.protocols import ArtifactStore, KeyService
from keyshare.exceptions import MissingArtifactError

logger = logging.getLogger(__name__)


class KeyAssembler:
    """Merge the pending preamble and the exported key.

    Parameters
    ----------
    store:
        Filesystem adapter for the artifacts.
    key_service:
        Backend exporting the ASCII-armored public key.
    """

    def __init__(self, store: ArtifactStore, key_service: KeyService) -> None:
        self._store = store
        self._key_service = key_service

    def assemble(self, key_id: str, paths: ArtifactPaths) -> None:
        """Produce :attr:`ArtifactPaths.output` for *key_id*.

        Raises
        ------
        MissingArtifactError
            If the pending preamble is missing, the export is empty, or
            the output is unreadable afterwards.
        KeyExportError
            If the key service fails.
        """
        if not self._store.is_readable(paths.pending):
            raise MissingArtifactError(
                f"Pending preamble {paths.pending} is missing or unreadable.",
                hint="Run keyshare again to rebuild the preamble.",
            )

        self._store.rename(paths.pending, paths.output)
        logger.debug("Moved %s to %s", paths.pending, paths.output)

        self._store.remove(paths.exported)
        self._key_service.export_public_key(key_id, paths.exported)
        if not self._store.is_readable(paths.exported):
            raise MissingArtifactError(
                f"Exported key {paths.exported} is missing or unreadable.",
            )

        copied = self._store.append(paths.exported, paths.output)
        if copied == 0:
            raise MissingArtifactError(
                f"Exported key {paths.exported} is empty.",
                hint=f"Check that '{key_id}' names a key in your keyring.",
            )

        if not self._store.is_readable(paths.output):
            raise MissingArtifactError(
                f"Output file {paths.output} is missing or unreadable.",
            )

        self._store.remove(paths.exported)
        logger.info("Assembled %s", paths.output)
