"""Prefix-based autocomplete over the index vocabulary."""

from typing import Dict, List, Optional

from ..config import Settings
from .index import IndexBuilder
from .tokenizer import TokenProcessor


class SuggestionEngine:
    """Suggests completions for a partially typed query word."""

    def __init__(
        self,
        index: IndexBuilder,
        settings: Settings,
        tokenizer: Optional[TokenProcessor] = None,
    ) -> None:
        self.index = index
        self.settings = settings
        self.tokenizer = tokenizer or index.tokenizer

    def get_suggestions(self, partial: str, limit: Optional[int] = None) -> List[str]:
        """
        Get completions for a partial word.

        Candidates are index tokens and title words that start with the
        partial text and are strictly longer than it. Field-scoped tokens are
        skipped; their bare forms are already in the pool.

        Args:
            partial: Text typed so far
            limit: Maximum number of suggestions

        Returns:
            Unique completions, shortest first
        """
        if limit is None:
            limit = self.settings.suggestion_limit
        if not partial or len(partial) < self.settings.min_suggestion_length or limit <= 0:
            return []

        prefix = partial.lower()
        min_length = len(partial) + 1

        # dict keeps first-seen order for equal-length ties
        candidates: Dict[str, None] = {}
        for entry in self.index.iter_entries():
            for token in sorted(entry.tokens):
                if self.tokenizer.is_field_scoped(token):
                    continue
                if len(token) >= min_length and token.startswith(prefix):
                    candidates.setdefault(token, None)

            for word in self.tokenizer.tokenize_ordered(entry.metadata.title):
                if len(word) >= min_length and word.startswith(prefix):
                    candidates.setdefault(word, None)

        return sorted(candidates, key=len)[:limit]
