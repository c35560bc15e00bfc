"""Core search engine functionality."""

from .engine import SearchEngine
from .history import HistoryStore
from .index import IndexBuilder
from .ranking import QueryEngine
from .suggestions import SuggestionEngine
from .tokenizer import TokenProcessor

__all__ = [
    "SearchEngine",
    "HistoryStore",
    "IndexBuilder",
    "QueryEngine",
    "SuggestionEngine",
    "TokenProcessor",
]
