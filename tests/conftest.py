"""Shared fixtures for the flashcard search tests."""

import pytest

from flashcard_search.config import Settings
from flashcard_search.core.engine import SearchEngine
from flashcard_search.models.entities import Card, FlashcardSet, Folder
from flashcard_search.storage.memory import InMemoryStore, StaticEntityProvider


@pytest.fixture
def settings():
    """Default engine settings."""
    return Settings()


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def sample_folders():
    """Two folders, the second nested in the first."""
    return [
        Folder(
            id="f1",
            name="Languages",
            description="Foreign language decks",
            color="blue",
            is_bookmarked=True,
            tags=["study"],
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-10T00:00:00Z",
        ),
        Folder(
            id="f2",
            name="Spanish",
            description="Spanish vocabulary",
            parent_id="f1",
            color="red",
            created_at="2024-01-02T00:00:00Z",
            updated_at="2024-02-01T00:00:00Z",
        ),
    ]


@pytest.fixture
def sample_sets():
    """Two study sets with two cards each."""
    return [
        FlashcardSet(
            id="s1",
            title="Spanish Basics",
            description="Common greetings",
            folder_id="f2",
            is_bookmarked=True,
            tags=["spanish", "beginner"],
            cards=[
                Card(id="c1", term="hola", definition="hello"),
                Card(id="c2", term="adios", definition="goodbye"),
            ],
            created_at="2024-02-01T00:00:00Z",
            updated_at="2024-03-01T00:00:00Z",
        ),
        FlashcardSet(
            id="s2",
            title="French Basics",
            description="Greetings in French",
            folder_id="f1",
            cards=[
                Card(id="c3", term="bonjour", definition="hello"),
                Card(id="c4", term="merci", definition="thank you"),
            ],
            created_at="2024-03-01T00:00:00Z",
            updated_at="2024-04-01T00:00:00Z",
        ),
    ]


@pytest.fixture
def provider(sample_folders, sample_sets):
    """Entity provider serving the sample data."""
    return StaticEntityProvider(sample_folders, sample_sets)


@pytest.fixture
def engine(provider, store, settings):
    """Search engine with the sample data indexed."""
    search_engine = SearchEngine(provider, store, settings)
    search_engine.build_index()
    return search_engine