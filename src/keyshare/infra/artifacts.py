"""Filesystem adapter for generated artifacts.

Satisfies :class:`~keyshare.core.protocols.ArtifactStore`.  ``OSError``
from the operating system is mapped to
:class:`~keyshare.exceptions.MissingArtifactError`.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from keyshare.exceptions import MissingArtifactError

logger = logging.getLogger(__name__)


class LocalArtifactStore:
    """Plain local-disk implementation of the artifact operations."""

    def is_readable(self, path: Path) -> bool:
        return path.is_file() and os.access(path, os.R_OK)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def write_text(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise MissingArtifactError(f"Cannot write {path}: {exc}") from exc

    def rename(self, source: Path, target: Path) -> None:
        try:
            source.replace(target)
        except OSError as exc:
            raise MissingArtifactError(
                f"Cannot move {source} to {target}: {exc}",
            ) from exc

    def append(self, source: Path, target: Path) -> int:
        try:
            with source.open("rb") as src, target.open("ab") as dst:
                before = dst.tell()
                shutil.copyfileobj(src, dst)
                return dst.tell() - before
        except OSError as exc:
            raise MissingArtifactError(
                f"Cannot append {source} to {target}: {exc}",
            ) from exc

    def remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise MissingArtifactError(f"Cannot remove {path}: {exc}") from exc
        logger.debug("Removed %s", path)
