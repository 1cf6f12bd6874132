"""Core workflow — sequences the five publishing steps.

Preamble → assemble → sign → publish, strictly forward.  The only
re-entry point is the resume gate: a readable pending preamble from an
interrupted run skips the interactive preamble step entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from keyshare.core.assembler import KeyAssembler
from keyshare.core.models import InvocationContext, PublishState
from keyshare.core.preamble import PreambleBuilder, render_preamble
from keyshare.core.protocols import (
    ArtifactStore,
    KeyService,
    Prompter,
    RemoteCopyService,
    SigningService,
)
from keyshare.core.publisher import Publisher
from keyshare.core.signer import Signer
from keyshare.core.state import detect_state

logger = logging.getLogger(__name__)


class PublishWorkflow:
    """Drive one full run for a single key.

    Parameters
    ----------
    context:
        Resolved invocation context.
    store, key_service, signing_service, remote, prompter:
        Collaborators satisfying the :mod:`keyshare.core.protocols`
        contracts.
    clock:
        Optional timestamp source forwarded to the preamble builder.
    """

    def __init__(
        self,
        context: InvocationContext,
        *,
        store: ArtifactStore,
        key_service: KeyService,
        signing_service: SigningService,
        remote: RemoteCopyService,
        prompter: Prompter,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._context = context
        self._store = store
        self._key_service = key_service
        self._prompter = prompter
        self._clock = clock
        self._assembler = KeyAssembler(store, key_service)
        self._signer = Signer(store, signing_service)
        self._publisher = Publisher(remote)

    def prepare_preamble(self) -> bool:
        """Build and persist the pending preamble unless one already exists.

        Returns ``True`` when a new preamble was written, ``False`` when
        a previous run's preamble is reused.
        """
        paths = self._context.paths
        if self._store.is_readable(paths.pending):
            logger.info("Reusing existing preamble %s", paths.pending)
            return False

        builder = PreambleBuilder(
            self._context, self._key_service, self._prompter, clock=self._clock,
        )
        blocks = builder.build()
        self._store.write_text(paths.pending, render_preamble(blocks))
        logger.debug("Wrote %d preamble blocks to %s", len(blocks), paths.pending)
        return True

    def run(self) -> PublishState:
        """Execute every step and return the final state reached."""
        config = self._context.config
        paths = self._context.paths
        logger.debug("Initial state: %s", detect_state(paths, self._store).value)

        self.prepare_preamble()
        self._assembler.assemble(config.key_id, paths)
        self._signer.sign(config.key_id, paths)

        if self._publisher.publish(paths, config.upload_destination):
            return PublishState.PUBLISHED
        return PublishState.SIGNED
