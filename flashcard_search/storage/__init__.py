"""Storage collaborators for the search engine."""

from .base import EntityProvider, PersistentStore
from .file import JsonFileStore
from .memory import InMemoryStore, StaticEntityProvider

__all__ = [
    "EntityProvider",
    "PersistentStore",
    "JsonFileStore",
    "InMemoryStore",
    "StaticEntityProvider",
]
