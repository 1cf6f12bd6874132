"""Domain models for keyshare.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and path derivation.  They carry zero I/O
and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationConfig:
    """Parsed command-line configuration for a single run."""

    key_id: str
    """Key identifier passed to GnuPG (fingerprint, key ID or user ID)."""

    outfile: str
    """Output filename, relative to the home directory unless absolute."""

    sigfile: str
    """Detached signature filename, derived from :attr:`outfile`."""

    otr_fingerprint: str | None = None
    """Out-of-band identity fingerprint supplied with ``-f``."""

    upload_destination: str | None = None
    """``user@host:dir`` target for scp, or ``None`` to skip publishing."""


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Everything a run needs, resolved once at startup.

    Replaces a process-wide ``chdir`` and environment lookups: every
    component receives this object and resolves paths against
    :attr:`home` explicitly.
    """

    config: InvocationConfig
    home: Path
    prompt: str
    """Simulated shell prompt, e.g. ``alice@host:~$``."""

    tool_url: str

    @property
    def paths(self) -> ArtifactPaths:
        return ArtifactPaths.for_config(self.config, self.home)


# ---------------------------------------------------------------------------
# Filesystem artifacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ArtifactPaths:
    """Absolute locations of every file a run touches."""

    pending: Path
    """``<key>.prepend`` — preamble under construction; the resume marker."""

    exported: Path
    """``<key>.pub`` — temporary ASCII-armored key export."""

    output: Path
    signature: Path

    @classmethod
    def for_config(cls, config: InvocationConfig, home: Path) -> ArtifactPaths:
        return cls(
            pending=home / f"{config.key_id}.prepend",
            exported=home / f"{config.key_id}.pub",
            output=home / config.outfile,
            signature=home / config.sigfile,
        )


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------

class PublishState(enum.Enum):
    """Progress of a run, derived from which artifacts exist on disk."""

    NOT_STARTED = "not-started"
    PREAMBLE_COMPLETE = "preamble-complete"
    ASSEMBLED = "assembled"
    SIGNED = "signed"
    PUBLISHED = "published"
