"""Persisted history of free-text queries."""

import json
from collections import Counter
from typing import List, Optional

import structlog
from pydantic import TypeAdapter

from ..config import Settings
from ..storage.base import PersistentStore
from .tokenizer import TokenProcessor

logger = structlog.get_logger(__name__)

HistorySnapshot = TypeAdapter(List[str])


class HistoryStore:
    """Capped, deduplicated, most-recent-first list of past queries.

    The in-memory list is authoritative; every change is written through to
    the store and a failed write leaves the in-memory list as it is.
    """

    def __init__(
        self,
        store: PersistentStore,
        settings: Settings,
        tokenizer: Optional[TokenProcessor] = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.tokenizer = tokenizer or TokenProcessor()
        self._history: List[str] = []
        self.load()

    def load(self) -> None:
        """Replace the in-memory history with the persisted one, if any."""
        key = self.settings.history_key
        try:
            raw = self.store.get(key)
        except Exception as e:
            logger.warning("Failed to read search history", key=key, error=str(e))
            self._history = []
            return

        if raw is None:
            self._history = []
            return

        try:
            history = HistorySnapshot.validate_json(raw)
        except ValueError as e:
            logger.warning("Discarding corrupt search history", key=key, error=str(e))
            self._history = []
            return

        self._history = history[:self.settings.history_limit]

    def save_query(self, query: str) -> None:
        """
        Record a query as the most recent one.

        Blank queries are ignored. An earlier identical query is moved to the
        front instead of being duplicated.

        Args:
            query: Query string exactly as entered
        """
        if not query or not query.strip():
            return

        history = [previous for previous in self._history if previous != query]
        history.insert(0, query)
        self._history = history[:self.settings.history_limit]
        self._persist()

    def get_history(self) -> List[str]:
        return list(self._history)

    def get_popular_searches(self) -> List[str]:
        """Most frequent queries, ties in most-recent-first order."""
        frequency = Counter(self._history)
        return [query for query, _ in frequency.most_common(self.settings.popular_limit)]

    def get_trending_terms(self) -> List[str]:
        """Distinct longer words from the most recent queries, first-seen order."""
        terms: List[str] = []
        for query in self._history[:self.settings.trending_window]:
            for term in self.tokenizer.tokenize_ordered(query):
                if len(term) >= self.settings.trending_min_length and term not in terms:
                    terms.append(term)
        return terms[:self.settings.trending_limit]

    def clear_history(self) -> None:
        self._history = []
        self._persist()

    def __len__(self) -> int:
        return len(self._history)

    def _persist(self) -> None:
        key = self.settings.history_key
        try:
            self.store.set(key, json.dumps(self._history))
        except Exception as e:
            logger.error("Failed to persist search history", key=key, error=str(e))
