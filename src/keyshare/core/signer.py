"""Core signer — detached signature over the assembled output."""

from __future__ import annotations

import logging

from keyshare.core.models import ArtifactPaths
from keyshare.core.protocols import ArtifactStore, SigningService
from keyshare.exceptions import MissingArtifactError

logger = logging.getLogger(__name__)


class Signer:
    """Sign the output file through an injected :class:`SigningService`."""

    def __init__(self, store: ArtifactStore, signing_service: SigningService) -> None:
        self._store = store
        self._signing_service = signing_service

    def sign(self, key_id: str, paths: ArtifactPaths) -> None:
        """Sign the output with *key_id* into the signature path.

        Raises
        ------
        MissingArtifactError
            If the output file is not readable; nothing is signed.
        SigningError
            If the signing backend fails.
        """
        if not self._store.is_readable(paths.output):
            raise MissingArtifactError(
                f"Cannot sign {paths.output}: file is missing or unreadable.",
            )
        self._signing_service.detach_sign(key_id, paths.output, paths.signature)
        logger.info("Signed %s -> %s", paths.output, paths.signature)
