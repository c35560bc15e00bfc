"""
Flashcard Search - embeddable search engine for folders, study sets and cards.

This package indexes folders, study sets and their cards into a token index,
answers free-text and filtered queries with relevance-ranked results, offers
prefix autocomplete, and keeps a capped history of past queries.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .logging_config import configure_logging
from .models.entities import Card, EntityKind, FlashcardSet, Folder, SetCard
from .models.request import SearchFilter, SearchQuery, SortBy, SortOrder
from .models.response import SearchResult

__all__ = [
    "SearchEngine",
    "configure_logging",
    "Card",
    "EntityKind",
    "FlashcardSet",
    "Folder",
    "SetCard",
    "SearchFilter",
    "SearchQuery",
    "SortBy",
    "SortOrder",
    "SearchResult",
]
