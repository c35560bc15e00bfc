"""Collaborator interfaces consumed by the search engine."""

from typing import Optional, Protocol, Sequence

from ..models.entities import FlashcardSet, Folder


class PersistentStore(Protocol):
    """Durable key/value blob storage."""

    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous blob."""
        ...


class EntityProvider(Protocol):
    """Source of folder and study set snapshots."""

    def get_folders(self) -> Sequence[Folder]:
        ...

    def get_sets(self) -> Sequence[FlashcardSet]:
        ...
