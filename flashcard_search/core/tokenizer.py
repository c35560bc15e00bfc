"""Text tokenization for index building and query matching."""

import re
import unicodedata
from typing import Iterable, List, Optional, Set

TITLE_PREFIX = "title:"
TAG_PREFIX = "tag:"
FIELD_PREFIXES = (TITLE_PREFIX, TAG_PREFIX)

# Tokens shorter than this are dropped
MIN_TOKEN_LENGTH = 2


class TokenProcessor:
    """Turns raw text into the token sets stored in index entries."""

    def __init__(self) -> None:
        """Initialize the token processor."""
        self.non_word_regex = re.compile(r"[^\w\s]")
        self.whitespace_regex = re.compile(r"\s+")

    def normalize(self, text: Optional[str]) -> str:
        """
        Normalize text before splitting it into tokens.

        Args:
            text: Input text

        Returns:
            Lowercased text with every non-word character replaced by a space
        """
        if not text:
            return ""

        normalized = unicodedata.normalize("NFKC", text).lower()
        return self.non_word_regex.sub(" ", normalized)

    def tokenize_ordered(self, text: Optional[str]) -> List[str]:
        """
        Tokenize text, keeping the first occurrence of each token in order.

        Args:
            text: Input text

        Returns:
            List of unique tokens in first-seen order
        """
        tokens: List[str] = []
        seen: Set[str] = set()

        for token in self.whitespace_regex.split(self.normalize(text)):
            if len(token) < MIN_TOKEN_LENGTH or token in seen:
                continue
            seen.add(token)
            tokens.append(token)

        return tokens

    def tokenize(self, text: Optional[str]) -> Set[str]:
        """Tokenize text into an unordered token set."""
        return set(self.tokenize_ordered(text))

    def create_tokens(
        self,
        title: str,
        content: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Set[str]:
        """
        Build the token set for an index entry.

        Title and tag tokens are stored twice: bare, and with a field prefix
        (``title:`` / ``tag:``) so matches on those fields can be weighted
        without keeping separate per-field indices.

        Args:
            title: Entry title
            content: Body text
            description: Entry description
            tags: User tags

        Returns:
            Set of bare and field-scoped tokens
        """
        tokens: Set[str] = set()

        for token in self.tokenize(title):
            tokens.add(token)
            tokens.add(f"{TITLE_PREFIX}{token}")

        tokens.update(self.tokenize(content))
        tokens.update(self.tokenize(description))

        for tag in tags or []:
            for token in self.tokenize(tag):
                tokens.add(token)
                tokens.add(f"{TAG_PREFIX}{token}")

        return tokens

    @staticmethod
    def is_field_scoped(token: str) -> bool:
        """Return True for tokens carrying a ``title:`` or ``tag:`` prefix."""
        return token.startswith(FIELD_PREFIXES)
