"""Clone models: the identity cache and clone diagnostics."""

from __future__ import annotations

from typing import Any


class IdentityCache:
    """Maps original objects to their clones by identity, not equality.

    Entries keep a strong reference to the original so its id() cannot be
    reused by another object while the cache is alive. One cache serves one
    top-level clone() call; a pre-seeded cache makes clone() substitute the
    seeded replacement wherever the original is reached.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def register(self, original: Any, clone: Any) -> None:
        """Record clone as the replacement for original."""
        self._entries[id(original)] = (original, clone)

    def __contains__(self, original: object) -> bool:
        return id(original) in self._entries

    def __getitem__(self, original: Any) -> Any:
        return self._entries[id(original)][1]

    def __len__(self) -> int:
        return len(self._entries)


class UnsupportedTypeError(TypeError):
    """Raised when clone() meets a container whose storage it cannot copy.

    Only raised under the "error" unsupported policy.
    """

    pass


class UnsupportedCloneWarning(UserWarning):
    """Emitted when a container was cloned as an empty instance of its type."""

    pass
