"""In-memory collaborators for embedding and tests."""

from typing import Dict, Iterable, List, Optional

from ..models.entities import FlashcardSet, Folder


class InMemoryStore:
    """Key/value store backed by a plain dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        """
        Remove a stored blob.

        Args:
            key: The key to remove

        Returns:
            True if removed, False if not found
        """
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._data.keys())


class StaticEntityProvider:
    """Entity provider serving fixed folder and set lists."""

    def __init__(
        self,
        folders: Optional[Iterable[Folder]] = None,
        sets: Optional[Iterable[FlashcardSet]] = None,
    ) -> None:
        self.folders: List[Folder] = list(folders or [])
        self.sets: List[FlashcardSet] = list(sets or [])

    def get_folders(self) -> List[Folder]:
        return list(self.folders)

    def get_sets(self) -> List[FlashcardSet]:
        return list(self.sets)
