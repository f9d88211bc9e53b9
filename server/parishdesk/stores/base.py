from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoreError(Exception):
    """Raised when the backing document store cannot complete a request."""


class RecordNotFoundError(LookupError):
    """Raised when a merge-write targets a document that does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No document at {path}")
        self.path = path


def split_path(path: str) -> tuple[str, str | None]:
    """Split ``collection`` or ``collection/key`` into its two parts."""

    parts = [part for part in (path or "").strip("/").split("/") if part]
    if not parts or len(parts) > 2:
        raise ValueError(f"Unsupported store path: {path!r}")
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def join_path(collection: str, key: str) -> str:
    return f"{collection}/{key}"


class DocumentStore(ABC):
    """Path-addressed key -> JSON document store.

    Paths are either a collection (``priests``) or a document inside one
    (``priests/-Nx3...``). Reading a collection returns ``{key: document}``
    ordered by key; reading a document returns the stored body. Bodies never
    contain their own key.
    """

    @abstractmethod
    def generate_key(self, path: str) -> str:
        """Return a new key that is unique under ``path``."""

    @abstractmethod
    def set(self, path: str, value: dict[str, Any]) -> None:
        """Write the whole document at ``path``, replacing anything there."""

    @abstractmethod
    def update(self, path: str, value: dict[str, Any]) -> None:
        """Merge top-level fields of ``value`` into the document at ``path``."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete the document or collection at ``path``; absent paths are ignored."""

    @abstractmethod
    def get(self, path: str) -> dict[str, Any] | None:
        """Read the document or collection subtree at ``path``."""
