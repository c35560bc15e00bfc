"""Unit tests for autocomplete suggestions."""

import pytest
from flashcard_search.config import Settings
from flashcard_search.core.index import IndexBuilder
from flashcard_search.core.suggestions import SuggestionEngine
from flashcard_search.models.entities import FlashcardSet


class TestSuggestionEngine:
    """Test cases for the SuggestionEngine class."""

    @pytest.fixture
    def index(self, store, settings, sample_folders, sample_sets):
        index = IndexBuilder(store, settings)
        index.build_index(sample_folders, sample_sets)
        return index

    @pytest.fixture
    def suggester(self, index, settings):
        """Suggestion engine over the sample data."""
        return SuggestionEngine(index, settings)

    def test_short_partial(self, suggester):
        """Partials shorter than two characters yield nothing."""
        assert suggester.get_suggestions("") == []
        assert suggester.get_suggestions("s") == []

    def test_prefix_completion(self, suggester):
        """Test basic prefix completion."""
        assert suggester.get_suggestions("gr") == ["greetings"]
        assert suggester.get_suggestions("bo") == ["bonjour"]

    def test_case_insensitive(self, suggester):
        """Test that the partial is lowercased before matching."""
        assert suggester.get_suggestions("SP") == ["spanish"]

    def test_requires_longer_completion(self, suggester):
        """A token equal to the partial is not a completion."""
        assert suggester.get_suggestions("spanish") == []

    def test_field_scoped_tokens_are_not_suggested(self, suggester):
        """Synthetic title:/tag: tokens never leak into suggestions."""
        assert suggester.get_suggestions("ti") == []
        assert suggester.get_suggestions("ta") == []

    def test_shortest_first(self, store, settings):
        """Test ordering by completion length."""
        index = IndexBuilder(store, settings)
        index.build_index([], [FlashcardSet(
            id="s1",
            title="Term",
            description="test terrain",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-01T00:00:00Z",
        )])

        suggestions = SuggestionEngine(index, settings).get_suggestions("te", 5)

        assert suggestions == ["term", "test", "terrain"]

    def test_limit(self, store, settings):
        """Test truncation to the requested limit."""
        index = IndexBuilder(store, settings)
        index.build_index([], [FlashcardSet(
            id="s1",
            title="Alphabet",
            description="alpha alphas alphanumeric alphabetical alpine",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-01T00:00:00Z",
        )])
        suggester = SuggestionEngine(index, settings)

        assert suggester.get_suggestions("al", 2) == ["alpha", "alphas"]
        assert len(suggester.get_suggestions("al")) == 5
        assert suggester.get_suggestions("al", 0) == []

    def test_default_limit_from_settings(self, index):
        """Test that the default limit comes from settings."""
        suggester = SuggestionEngine(index, Settings(suggestion_limit=1))

        assert len(suggester.get_suggestions("he")) == 1

    def test_empty_index(self, store, settings):
        """Test suggestions without any indexed data."""
        suggester = SuggestionEngine(IndexBuilder(store, settings), settings)

        assert suggester.get_suggestions("hello") == []
