"""Core preamble builder — the human-readable text placed above the key.

The preamble is built as an ordered list of text blocks.  Building is
pure apart from the injected collaborators: a :class:`Prompter` for
questions, a :class:`KeyService` for the fingerprint listing and a
clock for the provenance timestamp.  Persisting the blocks is the
workflow's job.

Block order
-----------
1. Fingerprint block — simulated ``gpg --fingerprint`` session.
2. Identity block — optional out-of-band (OTR) fingerprint.
3. Location blocks — tool notice, publication location, signed-at
   timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from keyshare.core.models import InvocationContext
from keyshare.core.protocols import KeyService, Prompter

logger = logging.getLogger(__name__)

DECLINE_TOKENS: frozenset[str] = frozenset({"n", "N", "no", "No"})
"""Answers that decline a ``(Y/n)`` question.  Everything else accepts."""

TIMESTAMP_FORMAT: str = "%a %b %d %H:%M:%S %Z %Y"
"""Same layout as the ``date`` command's default output."""

INCLUDE_OTR_QUESTION = "Include an OTR fingerprint? (Y/n)"
OTR_FINGERPRINT_QUESTION = "OTR fingerprint:"
OTR_ACCOUNT_QUESTION = "Account the OTR fingerprint belongs to:"
INCLUDE_LOCATION_QUESTION = "Include an online location? (Y/n)"
LOCATION_URL_QUESTION = "Base URL the files will be published under:"


def is_decline(answer: str) -> bool:
    """Return ``True`` only for the fixed negative tokens.

    Surrounding whitespace is ignored; case is not.
    """
    return answer.strip() in DECLINE_TOKENS


def _local_now() -> datetime:
    return datetime.now().astimezone()


def render_preamble(blocks: list[str]) -> str:
    """Concatenate *blocks* in order."""
    return "".join(blocks)


class PreambleBuilder:
    """Interactively assemble the preamble blocks for one key.

    Parameters
    ----------
    context:
        Resolved invocation context (prompt string, filenames, tool URL).
    key_service:
        Source of the fingerprint listing.
    prompter:
        Line-input adapter; answers may be empty.
    clock:
        Returns the timestamp written into the closing block.  Called
        when that block is built, not at construction.
    """

    def __init__(
        self,
        context: InvocationContext,
        key_service: KeyService,
        prompter: Prompter,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._context = context
        self._key_service = key_service
        self._prompter = prompter
        self._clock = clock or _local_now

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self) -> list[str]:
        """Run every sub-step and return the blocks in output order."""
        blocks = [self.fingerprint_block()]
        identity = self.identity_block()
        if identity is not None:
            blocks.append(identity)
        blocks.extend(self.location_blocks())
        return blocks

    # ------------------------------------------------------------------
    # Sub-steps
    # ------------------------------------------------------------------

    def fingerprint_block(self) -> str:
        config = self._context.config
        prompt = self._context.prompt
        listing = self._key_service.fingerprint(config.key_id).rstrip("\n")
        return (
            "\n"
            f"{prompt} gpg --fingerprint {config.key_id}\n"
            f"{listing}\n"
            f"{prompt} cat {config.outfile}\n"
        )

    def identity_block(self) -> str | None:
        """Return the OTR block, or ``None`` when declined or left empty.

        A fingerprint given on the command line skips the include
        question and goes straight to the account name.
        """
        fingerprint = self._context.config.otr_fingerprint
        if not fingerprint:
            if is_decline(self._prompter.ask(INCLUDE_OTR_QUESTION)):
                logger.debug("OTR fingerprint declined")
                return None
            fingerprint = self._prompter.ask(OTR_FINGERPRINT_QUESTION).strip()
            if not fingerprint:
                logger.debug("No OTR fingerprint entered; skipping block")
                return None

        account = self._prompter.ask(OTR_ACCOUNT_QUESTION).strip()
        return (
            "\n"
            f"OTR fingerprint for {account}:\n"
            f"{fingerprint}\n"
        )

    def location_blocks(self) -> list[str]:
        """Return the tool notice, location statement and closing block."""
        config = self._context.config
        blocks = [
            "\n"
            "This file was generated with keyshare, available at:\n"
            f"{self._context.tool_url}\n"
        ]

        url = ""
        if not is_decline(self._prompter.ask(INCLUDE_LOCATION_QUESTION)):
            url = self._prompter.ask(LOCATION_URL_QUESTION).strip()

        if url:
            blocks.append(
                "\n"
                "The latest signed copy of this key is published at:\n"
                f"{url}{config.sigfile}\n"
            )
        else:
            blocks.append(
                "\n"
                "Verify this file against its detached signature:\n"
                f"{config.sigfile}\n"
            )

        signed_at = self._clock().strftime(TIMESTAMP_FORMAT)
        blocks.append(
            "\n"
            "The signature was made with the private key belonging to the\n"
            "fingerprint above. Its timestamp should match this one:\n"
            f"{self._context.prompt} date\n"
            f"{signed_at}\n"
            "\n"
        )
        return blocks
