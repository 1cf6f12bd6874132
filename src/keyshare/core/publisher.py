"""Core publisher — optional copy of the artifacts to a remote host."""

from __future__ import annotations

import logging

from keyshare.core.models import ArtifactPaths
from keyshare.core.protocols import RemoteCopyService

logger = logging.getLogger(__name__)


class Publisher:
    """Hand the output and signature to a :class:`RemoteCopyService`."""

    def __init__(self, remote: RemoteCopyService) -> None:
        self._remote = remote

    def publish(self, paths: ArtifactPaths, destination: str | None) -> bool:
        """Copy both artifacts to *destination* in one call.

        Returns ``False`` without touching the remote service when no
        destination is configured.  Transfer failures propagate as
        :class:`~keyshare.exceptions.UploadError`; there is no retry.
        """
        if not destination:
            logger.debug("No upload destination; skipping publish")
            return False
        self._remote.copy([paths.output, paths.signature], destination)
        logger.info(
            "Published %s and %s to %s",
            paths.output.name,
            paths.signature.name,
            destination,
        )
        return True
