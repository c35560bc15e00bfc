"""Main search engine implementation."""

import time
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..exceptions import InvalidPayloadError
from ..models.entities import EntityKind
from ..models.index import IndexEntry
from ..models.request import SearchQuery
from ..models.response import SearchResult
from ..storage.base import EntityProvider, PersistentStore
from .history import HistoryStore
from .index import IndexBuilder, ItemData
from .ranking import QueryEngine
from .suggestions import SuggestionEngine
from .tokenizer import TokenProcessor

logger = structlog.get_logger(__name__)


class SearchEngine:
    """Search, autocomplete and query history over folders, sets and cards.

    Each instance owns its index and history. Nothing here locks: callers
    sharing one instance across threads must serialize the mutating
    operations (``build_index``, ``update_item``, ``remove_item``,
    ``save_search_query``, ``clear_search_history``).
    """

    def __init__(
        self,
        provider: EntityProvider,
        store: PersistentStore,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Initialize the search engine.

        Args:
            provider: Source of folder and set snapshots for full rebuilds
            store: Durable store for the serialized index and history
            settings: Engine settings; the cached application settings when omitted
        """
        self.provider = provider
        self.settings = settings or get_settings()
        self.tokenizer = TokenProcessor()
        self.index = IndexBuilder(store, self.settings, self.tokenizer)
        self.query_engine = QueryEngine(self.index, self.tokenizer)
        self.suggestion_engine = SuggestionEngine(self.index, self.settings, self.tokenizer)
        self.history = HistoryStore(store, self.settings, self.tokenizer)

        # Performance tracking
        self._stats = self._empty_stats()

    def build_index(self) -> None:
        """Rebuild the index from the entity provider.

        If the provider fails or hands out invalid entities the current index
        is kept as it is.
        """
        try:
            folders = self.provider.get_folders()
            sets = self.provider.get_sets()
        except Exception as e:
            logger.error("Failed to load entities for indexing", error=str(e))
            return

        try:
            self.index.build_index(folders, sets)
        except InvalidPayloadError as e:
            logger.error("Entity provider returned invalid data", error=str(e))

    def search(self, query: Union[SearchQuery, Mapping[str, Any]]) -> List[SearchResult]:
        """
        Search the index.

        Args:
            query: A SearchQuery, or a mapping validating into one

        Returns:
            Ordered search results
        """
        start_time = time.time()

        if not isinstance(query, SearchQuery):
            try:
                query = SearchQuery.model_validate(query)
            except ValidationError as e:
                logger.warning("Rejected malformed search query", error=str(e))
                return []

        results = self.query_engine.search(query)

        execution_time = (time.time() - start_time) * 1000
        self._stats["total_queries"] += 1
        self._stats["total_execution_time"] += execution_time
        if results:
            self._stats["queries_with_results"] += 1
        else:
            self._stats["no_matches"] += 1

        logger.debug(
            "Search executed",
            query=query.free_text,
            results=len(results),
            execution_time_ms=round(execution_time, 3),
        )
        return results

    def get_suggestions(self, partial: str, limit: Optional[int] = None) -> List[str]:
        return self.suggestion_engine.get_suggestions(partial, limit)

    def save_search_query(self, query: str) -> None:
        self.history.save_query(query)

    def get_search_history(self) -> List[str]:
        return self.history.get_history()

    def clear_search_history(self) -> None:
        self.history.clear_history()

    def get_popular_searches(self) -> List[str]:
        return self.history.get_popular_searches()

    def get_trending_terms(self) -> List[str]:
        return self.history.get_trending_terms()

    def update_item(self, item_id: str, kind: Union[EntityKind, str], data: ItemData) -> None:
        """
        Re-index a single folder, set or card.

        Args:
            item_id: Identifier of the entity
            kind: Kind of the entity
            data: New state of the entity; cards are passed as a SetCard

        Raises:
            InvalidPayloadError: If ``data`` does not describe an entity of ``kind``
        """
        self.index.update_item(item_id, kind, data)

    def remove_item(self, item_id: str, kind: Optional[Union[EntityKind, str]] = None) -> int:
        """Remove an entity's entries; every kind when ``kind`` is None."""
        return self.index.remove_item(item_id, kind)

    def get_entries(self) -> List[IndexEntry]:
        """Copies of the current index entries."""
        return self.index.entries()

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        # Calculate averages
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["no_match_rate"] = stats["no_matches"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["no_match_rate"] = 0.0

        stats["index_stats"] = self.index.get_stats()
        stats["history_size"] = len(self.history)

        return stats

    def reset_stats(self) -> None:
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "queries_with_results": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
        }
