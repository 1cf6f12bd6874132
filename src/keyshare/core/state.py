"""Derive :class:`PublishState` from the artifacts present on disk."""

from __future__ import annotations

from keyshare.core.models import ArtifactPaths, PublishState
from keyshare.core.protocols import ArtifactStore


def detect_state(paths: ArtifactPaths, store: ArtifactStore) -> PublishState:
    """Return the furthest state the files on disk prove was reached.

    A readable pending preamble wins over everything else: it means a
    previous run stopped between building the preamble and assembly.
    ``PUBLISHED`` leaves no local trace and is never detected.
    """
    if store.is_readable(paths.pending):
        return PublishState.PREAMBLE_COMPLETE
    if store.exists(paths.output):
        if store.exists(paths.signature):
            return PublishState.SIGNED
        return PublishState.ASSEMBLED
    return PublishState.NOT_STARTED
