"""Configuration module using Pydantic Settings.

Provides typed configuration for the clone engine and the combinators with
environment variable support.

Usage:
    from replica.config import CloneSettings, CombinatorSettings

    settings = CloneSettings(on_unsupported="empty")
    quiet = CombinatorSettings(log_ignored_settlements=False)
"""

from replica.config.settings import CloneSettings, CombinatorSettings, UnsupportedPolicy

__all__ = [
    "CloneSettings",
    "CombinatorSettings",
    "UnsupportedPolicy",
]
