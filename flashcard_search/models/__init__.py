"""Data models for the flashcard search engine."""

from .entities import Card, EntityKind, FlashcardSet, Folder, SetCard
from .index import (
    CardEntry,
    CardMetadata,
    FolderEntry,
    FolderMetadata,
    IndexEntry,
    IndexSnapshot,
    SetEntry,
    SetMetadata,
)
from .request import DateRange, SearchFilter, SearchQuery, SortBy, SortOrder
from .response import SearchResult

__all__ = [
    "Card",
    "EntityKind",
    "FlashcardSet",
    "Folder",
    "SetCard",
    "CardEntry",
    "CardMetadata",
    "FolderEntry",
    "FolderMetadata",
    "IndexEntry",
    "IndexSnapshot",
    "SetEntry",
    "SetMetadata",
    "DateRange",
    "SearchFilter",
    "SearchQuery",
    "SortBy",
    "SortOrder",
    "SearchResult",
]
