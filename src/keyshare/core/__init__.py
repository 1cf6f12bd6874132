"""Core / service layer — pure orchestration and text construction.

Rules
-----
* No ``print()`` calls.
* No direct filesystem, subprocess or network I/O — collaborators are
  injected through :mod:`keyshare.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from keyshare.core.assembler import KeyAssembler
from keyshare.core.models import (
    ArtifactPaths,
    InvocationConfig,
    InvocationContext,
    PublishState,
)
from keyshare.core.preamble import PreambleBuilder
from keyshare.core.protocols import (
    ArtifactStore,
    KeyService,
    Prompter,
    RemoteCopyService,
    SigningService,
)
from keyshare.core.publisher import Publisher
from keyshare.core.signer import Signer
from keyshare.core.workflow import PublishWorkflow

__all__: list[str] = [
    "ArtifactPaths",
    "ArtifactStore",
    "InvocationConfig",
    "InvocationContext",
    "KeyAssembler",
    "KeyService",
    "PreambleBuilder",
    "Prompter",
    "PublishState",
    "PublishWorkflow",
    "Publisher",
    "RemoteCopyService",
    "Signer",
    "SigningService",
]
