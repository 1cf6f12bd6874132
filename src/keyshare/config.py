"""Runtime settings read from the environment.

Every setting can be overridden with a ``KEYSHARE_`` prefixed variable,
e.g. ``KEYSHARE_GPG=/opt/gnupg/bin/gpg2``.  Settings are resolved once
at startup and passed down explicitly; nothing else in the package
reads ``os.environ``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOOL_URL: str = "https://pypi.org/project/keyshare/"
"""Where the generating tool can be obtained; quoted in every preamble."""

LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Environment-derived configuration."""

    model_config = SettingsConfigDict(
        env_prefix="KEYSHARE_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    gpg: str = Field(
        default="gpg",
        description="Executable used for fingerprint listing, export and signing",
    )

    scp: str = Field(
        default="scp",
        description="Executable used to copy artifacts to the remote host",
    )

    tool_url: str = Field(
        default=DEFAULT_TOOL_URL,
        description="URL written into the provenance notice",
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for the keyshare logger (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("gpg", "scp", "tool_url", "log_level", mode="before")
    @classmethod
    def blank_means_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat unset-but-empty variables like unset ones."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return cls.model_fields[info.field_name].default
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        """Normalise case; unknown names fall back to WARNING."""
        level = v.upper()
        return level if level in LOG_LEVELS else "WARNING"
