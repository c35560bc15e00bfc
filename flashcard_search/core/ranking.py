"""Filtering, scoring and ordering of index entries."""

from typing import Iterable, List, Optional, Tuple

from ..models.entities import EntityKind
from ..models.index import IndexEntry
from ..models.request import SearchFilter, SearchQuery, SortBy, SortOrder
from ..models.response import SearchResult
from .index import IndexBuilder
from .tokenizer import TAG_PREFIX, TITLE_PREFIX, TokenProcessor

EXACT_MATCH_WEIGHT = 2.0
TITLE_MATCH_WEIGHT = 3.0
TAG_MATCH_WEIGHT = 2.5
PARTIAL_MATCH_WEIGHT = 0.5

# Score given to every entry of a filters-only query
FILTER_ONLY_SCORE = 1.0


class QueryEngine:
    """Ranks index entries against structured queries."""

    def __init__(self, index: IndexBuilder, tokenizer: Optional[TokenProcessor] = None) -> None:
        self.index = index
        self.tokenizer = tokenizer or index.tokenizer

    def search(self, query: SearchQuery) -> List[SearchResult]:
        """
        Run a query against the index.

        Args:
            query: Free text, filters, ordering and limit

        Returns:
            Ordered list of results; empty when the query expresses no intent
        """
        if not query.has_intent():
            return []

        candidates = self.apply_filters(self.index.iter_entries(), query.filters)
        query_tokens = self.tokenizer.tokenize_ordered(query.free_text)

        results: List[SearchResult] = []
        for entry in candidates:
            if not query_tokens:
                results.append(self._to_result(entry, [], FILTER_ONLY_SCORE))
                continue

            scored = self.score_entry(entry, query_tokens)
            if scored is not None:
                score, matched_terms = scored
                results.append(self._to_result(entry, matched_terms, score))

        results = self.sort_results(results, query.sort_by, query.sort_order)

        if query.limit is not None:
            results = results[:query.limit]

        return results

    def apply_filters(self, entries: Iterable[IndexEntry], filters: SearchFilter) -> List[IndexEntry]:
        """Keep the entries passing every set filter field."""
        return [entry for entry in entries if self.matches_filters(entry, filters)]

    def matches_filters(self, entry: IndexEntry, filters: SearchFilter) -> bool:
        if filters.kind and EntityKind(entry.kind) not in filters.kind:
            return False

        if filters.date_range is not None and not filters.date_range.contains(entry.metadata.updated_at):
            return False

        if filters.tags:
            wanted = {tag.lower() for tag in filters.tags}
            if not wanted.intersection(tag.lower() for tag in entry.metadata.tags):
                return False

        if filters.has_bookmark is not None and entry.is_bookmarked != filters.has_bookmark:
            return False

        if filters.color is not None:
            if entry.color is None or entry.color.lower() != filters.color.lower():
                return False

        if filters.parent_id is not None and entry.parent_id != filters.parent_id:
            return False

        return True

    def score_entry(self, entry: IndexEntry, query_tokens: List[str]) -> Optional[Tuple[float, List[str]]]:
        """
        Score one entry against the query tokens.

        Exact hits count toward coverage; ``title:`` and ``tag:`` hits only add
        weight. A query token also gains coverage when it is a substring of
        other bare tokens of the entry, each of which adds a small weight.

        Args:
            entry: Candidate index entry
            query_tokens: Unique, non-empty list of query tokens

        Returns:
            Tuple of (relevance score, matched terms), or None if nothing matched
        """
        matched_terms: List[str] = []
        raw_score = 0.0

        for query_token in query_tokens:
            if query_token in entry.tokens:
                matched_terms.append(query_token)
                raw_score += EXACT_MATCH_WEIGHT

            if f"{TITLE_PREFIX}{query_token}" in entry.tokens:
                raw_score += TITLE_MATCH_WEIGHT

            if f"{TAG_PREFIX}{query_token}" in entry.tokens:
                raw_score += TAG_MATCH_WEIGHT

            partial_matches = sum(
                1 for token in entry.tokens
                if token != query_token
                and query_token in token
                and not self.tokenizer.is_field_scoped(token)
            )
            if partial_matches:
                if query_token not in matched_terms:
                    matched_terms.append(query_token)
                raw_score += PARTIAL_MATCH_WEIGHT * partial_matches

        if not matched_terms:
            return None

        token_count = len(query_tokens)
        coverage = len(matched_terms) / token_count
        return (raw_score / token_count) * coverage, matched_terms

    def sort_results(
        self,
        results: List[SearchResult],
        sort_by: SortBy,
        sort_order: SortOrder,
    ) -> List[SearchResult]:
        """Stable sort; equal keys keep index order."""
        descending = sort_order is SortOrder.DESC

        if sort_by is SortBy.DATE:
            return sorted(results, key=lambda r: r.last_modified, reverse=descending)
        if sort_by is SortBy.NAME:
            return sorted(results, key=lambda r: r.title, reverse=descending)
        if sort_by is SortBy.TYPE:
            return sorted(results, key=lambda r: r.kind.value, reverse=descending)

        # Relevance is always highest first
        return sorted(results, key=lambda r: r.relevance_score, reverse=True)

    def _to_result(self, entry: IndexEntry, matched_terms: List[str], score: float) -> SearchResult:
        return SearchResult(
            id=entry.id,
            kind=EntityKind(entry.kind),
            title=entry.metadata.title,
            description=entry.metadata.description,
            snippet=entry.content if entry.kind == EntityKind.CARD.value else None,
            parent_name=entry.metadata.parent_name,
            relevance_score=score,
            matched_terms=list(matched_terms),
            last_modified=entry.metadata.updated_at,
        )
