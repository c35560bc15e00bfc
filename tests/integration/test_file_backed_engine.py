"""Integration tests for an engine persisting to the filesystem."""

import json

import pytest
from flashcard_search.config import Settings
from flashcard_search.core.engine import SearchEngine
from flashcard_search.models.entities import Card, FlashcardSet, SetCard
from flashcard_search.storage.file import JsonFileStore
from flashcard_search.storage.memory import StaticEntityProvider


class TestFileBackedEngine:
    """End-to-end tests over JsonFileStore."""

    @pytest.fixture
    def storage_dir(self, tmp_path):
        return tmp_path / "search"

    @pytest.fixture
    def file_settings(self, storage_dir):
        return Settings(storage_dir=str(storage_dir))

    @pytest.fixture
    def file_engine(self, provider, file_settings):
        """Engine persisting to a temporary directory."""
        engine = SearchEngine(provider, JsonFileStore.from_settings(file_settings), file_settings)
        engine.build_index()
        return engine

    def test_index_written_to_disk(self, file_engine, storage_dir, file_settings):
        """The index blob is a JSON array of entries."""
        payload = json.loads((storage_dir / f"{file_settings.index_key}.json").read_text(encoding="utf-8"))

        assert [item["id"] for item in payload] == ["f1", "f2", "s1", "c1", "c2", "s2", "c3", "c4"]
        assert {"id", "kind", "content", "tokens", "metadata"} <= set(payload[0])

    def test_restart_restores_state(self, file_engine, provider, file_settings):
        """A fresh process over the same directory sees the same index and history."""
        file_engine.save_search_query("spanish")
        file_engine.save_search_query("bonjour")
        expected = file_engine.search({"query": "hello", "sortBy": "name", "sortOrder": "asc"})

        restarted = SearchEngine(provider, JsonFileStore.from_settings(file_settings), file_settings)

        assert restarted.search({"query": "hello", "sortBy": "name", "sortOrder": "asc"}) == expected
        assert restarted.get_search_history() == ["bonjour", "spanish"]
        assert restarted.get_suggestions("bo") == ["bonjour"]

    def test_incremental_updates_survive_restart(self, file_engine, provider, file_settings, sample_sets):
        """Updates and removals are flushed wholesale on every call."""
        new_set = FlashcardSet(
            id="s3",
            title="German Basics",
            cards=[Card(id="c5", term="danke", definition="thanks")],
            created_at="2024-05-01T00:00:00Z",
            updated_at="2024-05-01T00:00:00Z",
        )
        file_engine.update_item("s3", "set", new_set)
        file_engine.update_item("c5", "card", SetCard(card=new_set.cards[0], owner=new_set))
        file_engine.remove_item("s2")

        restarted = SearchEngine(provider, JsonFileStore.from_settings(file_settings), file_settings)
        results = restarted.search({"query": "danke"})

        assert [(r.id, r.kind.value) for r in results] == [("c5", "card"), ("s3", "set")]
        assert restarted.search({"query": "bonjour", "filters": {"type": ["set"]}}) == []

    def test_corrupt_file_recovers_empty(self, file_engine, provider, storage_dir, file_settings):
        """A damaged index file is treated as an empty index."""
        (storage_dir / f"{file_settings.index_key}.json").write_text("[{broken", encoding="utf-8")

        restarted = SearchEngine(provider, JsonFileStore.from_settings(file_settings), file_settings)
        assert restarted.get_entries() == []

        restarted.build_index()
        assert len(restarted.get_entries()) == 8

    def test_rebuild_after_source_change(self, file_engine, sample_folders, sample_sets, file_settings):
        """A rebuild picks up changed source data."""
        trimmed = [s for s in sample_sets if s.id != "s1"]
        file_engine.provider = StaticEntityProvider(sample_folders, trimmed)

        file_engine.build_index()

        assert file_engine.search({"query": "hola"}) == []
        assert len(file_engine.get_entries()) == 5
