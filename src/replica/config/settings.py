"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from replica.config import CloneSettings, CombinatorSettings

    # Load from environment variables (CLONE_*, COMBINATOR_*)
    clone_settings = CloneSettings()
    combinator_settings = CombinatorSettings()

    # Or override with explicit values
    clone_settings = CloneSettings(on_unsupported="error")
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

UnsupportedPolicy = Literal["empty", "warn", "error"]


class CloneSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the deep clone engine.

    Attributes:
        on_unsupported: What clone() does with containers whose contents it
            cannot see (sets, bytearrays, deques). "empty" yields an empty
            instance of the same type, "warn" does the same and emits
            UnsupportedCloneWarning, "error" raises UnsupportedTypeError.

    Environment Variables:
        CLONE_ON_UNSUPPORTED
    """

    model_config = SettingsConfigDict(
        env_prefix="CLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    on_unsupported: UnsupportedPolicy = Field(
        default="warn",
        description="Handling of containers with hidden internal storage.",
    )


class CombinatorSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the promise-style combinators.

    Attributes:
        log_ignored_settlements: Log (at DEBUG) settlements that arrive after
            the combined result was already decided.

    Environment Variables:
        COMBINATOR_LOG_IGNORED_SETTLEMENTS
    """

    model_config = SettingsConfigDict(
        env_prefix="COMBINATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_ignored_settlements: bool = True
