"""Shared pytest fixtures and configuration for the keyshare test suite.

Guidelines
----------
* No real gpg or scp — collaborators are faked at the protocol boundary
  or ``subprocess.run`` is mocked in infra tests.
* No terminal interaction — prompts are scripted.
* Filesystem work happens under ``tmp_path`` only.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import pytest

from keyshare.core.models import InvocationConfig, InvocationContext
from keyshare.core.naming import derive_filenames

KEY_ID = "ABCD1234"
PROMPT = "alice@box:~$"
TOOL_URL = "https://example.org/keyshare/"
FINGERPRINT_LISTING = (
    "pub   ed25519 2024-01-01 [SC]\n"
    "      0123 4567 89AB CDEF 0123  4567 89AB CDEF ABCD 1234\n"
    "uid           [ultimate] Alice <alice@example.org>\n"
)
KEY_BYTES = (
    b"-----BEGIN PGP PUBLIC KEY BLOCK-----\n\n"
    b"mDMEZZLfAhYJKwYBBAHaRw8BAQdA\n"
    b"-----END PGP PUBLIC KEY BLOCK-----\n"
)
SIGNED_AT = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


class ScriptedPrompter:
    """Prompter returning canned answers and recording every question."""

    def __init__(self, answers: Sequence[str] = ()) -> None:
        self._answers = list(answers)
        self.questions: list[str] = []

    def ask(self, message: str) -> str:
        self.questions.append(message)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self._answers.pop(0)


class FakeKeyService:
    def __init__(self, key_bytes: bytes = KEY_BYTES) -> None:
        self.key_bytes = key_bytes
        self.fingerprint_calls: list[str] = []
        self.exports: list[tuple[str, Path]] = []

    def fingerprint(self, key_id: str) -> str:
        self.fingerprint_calls.append(key_id)
        return FINGERPRINT_LISTING

    def export_public_key(self, key_id: str, destination: Path) -> None:
        self.exports.append((key_id, destination))
        destination.write_bytes(self.key_bytes)


class FakeSigningService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Path, Path]] = []

    def detach_sign(self, key_id: str, source: Path, signature: Path) -> None:
        self.calls.append((key_id, source, signature))
        signature.write_text("-----BEGIN PGP SIGNATURE-----\n", encoding="utf-8")


class RecordingRemote:
    def __init__(self) -> None:
        self.calls: list[tuple[list[Path], str]] = []

    def copy(self, paths: Sequence[Path], destination: str) -> None:
        self.calls.append((list(paths), destination))


def make_context(
    home: Path,
    *,
    key_id: str = KEY_ID,
    outfile: str | None = None,
    otr_fingerprint: str | None = None,
    upload_destination: str | None = None,
) -> InvocationContext:
    out, sig = derive_filenames(key_id, outfile)
    return InvocationContext(
        config=InvocationConfig(
            key_id=key_id,
            outfile=out,
            sigfile=sig,
            otr_fingerprint=otr_fingerprint,
            upload_destination=upload_destination,
        ),
        home=home,
        prompt=PROMPT,
        tool_url=TOOL_URL,
    )


@pytest.fixture
def context(tmp_path: Path) -> InvocationContext:
    return make_context(tmp_path)


@pytest.fixture
def key_service() -> FakeKeyService:
    return FakeKeyService()


@pytest.fixture
def signing_service() -> FakeSigningService:
    return FakeSigningService()


@pytest.fixture
def remote() -> RecordingRemote:
    return RecordingRemote()
