"""Index construction and incremental maintenance."""

import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

import structlog

from ..config import Settings
from ..exceptions import InvalidPayloadError
from ..models.entities import Card, EntityKind, FlashcardSet, Folder, SetCard
from ..models.index import (
    CardEntry,
    CardMetadata,
    FolderEntry,
    FolderMetadata,
    IndexEntry,
    IndexSnapshot,
    SetEntry,
    SetMetadata,
)
from ..storage.base import PersistentStore
from .tokenizer import TokenProcessor

logger = structlog.get_logger(__name__)

ItemData = Union[Folder, FlashcardSet, SetCard, Mapping[str, Any]]


class IndexBuilder:
    """Owns the in-memory index and mirrors it to a persistent store."""

    def __init__(
        self,
        store: PersistentStore,
        settings: Settings,
        tokenizer: Optional[TokenProcessor] = None,
    ) -> None:
        """
        Initialize the index builder and load any persisted index.

        Args:
            store: Durable key/value store holding the serialized index
            settings: Engine settings
            tokenizer: Token processor shared with the query side
        """
        self.store = store
        self.settings = settings
        self.tokenizer = tokenizer or TokenProcessor()
        self._entries: List[IndexEntry] = []
        self._stats: Dict[str, Any] = {"last_built": None, "last_updated": None}

        self._payload_types = {
            EntityKind.FOLDER: Folder,
            EntityKind.SET: FlashcardSet,
            EntityKind.CARD: SetCard,
        }

        self.load()

    def load(self) -> None:
        """Replace the in-memory index with the persisted snapshot, if any."""
        key = self.settings.index_key
        try:
            raw = self.store.get(key)
        except Exception as e:
            logger.warning("Failed to read persisted index", key=key, error=str(e))
            self._entries = []
            return

        if raw is None:
            logger.debug("No persisted index found", key=key)
            self._entries = []
            return

        try:
            self._entries = IndexSnapshot.validate_json(raw)
        except ValueError as e:
            logger.warning("Discarding corrupt persisted index", key=key, error=str(e))
            self._entries = []
            return

        logger.info("Search index loaded", key=key, total_entries=len(self._entries))

    def build_index(self, folders: Sequence[Folder], sets: Sequence[FlashcardSet]) -> None:
        """
        Rebuild the whole index from entity snapshots.

        Args:
            folders: Every folder to index
            sets: Every study set to index; their cards are indexed too
        """
        folders = [self._coerce(EntityKind.FOLDER, folder) for folder in folders]
        sets = [self._coerce(EntityKind.SET, flashcard_set) for flashcard_set in sets]
        folder_names = {folder.id: folder.name for folder in folders}

        entries: List[IndexEntry] = []
        for folder in folders:
            entries.append(self._folder_entry(folder, folder_names.get(folder.parent_id or "")))

        for flashcard_set in sets:
            entries.append(self._set_entry(flashcard_set, folder_names.get(flashcard_set.folder_id or "")))
            for card in flashcard_set.cards:
                entries.append(self._card_entry(card, flashcard_set))

        self._entries = entries
        now = time.time()
        self._stats["last_built"] = now
        self._stats["last_updated"] = now

        logger.info(
            "Search index built",
            folders=len(folders),
            sets=len(sets),
            total_entries=len(entries),
        )
        self._persist()

    def update_item(self, item_id: str, kind: Union[EntityKind, str], data: ItemData) -> None:
        """
        Replace the entry for one entity, leaving the rest of the index alone.

        Args:
            item_id: Identifier of the entry to replace
            kind: Kind of the entity
            data: Folder, FlashcardSet, or SetCard payload (or a mapping
                validating into one) describing the entity's new state

        Raises:
            InvalidPayloadError: If ``data`` does not describe an entity of ``kind``
        """
        kind = EntityKind(kind)
        payload = self._coerce(kind, data)

        if kind is EntityKind.FOLDER:
            entry = self._folder_entry(payload, self._title_of(EntityKind.FOLDER, payload.parent_id))
        elif kind is EntityKind.SET:
            entry = self._set_entry(payload, self._title_of(EntityKind.FOLDER, payload.folder_id))
        elif kind is EntityKind.CARD:
            entry = self._card_entry(payload.card, payload.owner)
        else:
            raise InvalidPayloadError(f"Unsupported entity kind: {kind!r}")

        position = self._position_of(item_id, kind)
        self._entries = [
            existing for existing in self._entries
            if not (existing.id == item_id and existing.kind == kind.value)
        ]
        if entry.id != item_id:
            # The payload describes a different entity; drop any stale copy of it too
            self._entries = [
                existing for existing in self._entries
                if not (existing.id == entry.id and existing.kind == kind.value)
            ]

        if position is None or position > len(self._entries):
            self._entries.append(entry)
        else:
            self._entries.insert(position, entry)

        self._stats["last_updated"] = time.time()
        logger.debug("Index entry updated", id=item_id, kind=kind.value, tokens=len(entry.tokens))
        self._persist()

    def remove_item(self, item_id: str, kind: Optional[Union[EntityKind, str]] = None) -> int:
        """
        Remove entries for an entity.

        Args:
            item_id: Identifier of the entries to remove
            kind: Restrict removal to this kind; all kinds when None

        Returns:
            Number of removed entries
        """
        kind_value = EntityKind(kind).value if kind is not None else None

        before = len(self._entries)
        self._entries = [
            entry for entry in self._entries
            if not (entry.id == item_id and (kind_value is None or entry.kind == kind_value))
        ]
        removed = before - len(self._entries)

        self._stats["last_updated"] = time.time()
        logger.debug("Index entries removed", id=item_id, kind=kind_value, removed=removed)
        self._persist()
        return removed

    def entries(self) -> List[IndexEntry]:
        """Return deep copies of every entry in index order."""
        return [entry.model_copy(deep=True) for entry in self._entries]

    def iter_entries(self) -> Iterator[IndexEntry]:
        """Iterate over live entries; for read-only use by the query components."""
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        per_kind = {kind.value: 0 for kind in EntityKind}
        total_tokens = 0
        for entry in self._entries:
            per_kind[entry.kind] += 1
            total_tokens += len(entry.tokens)

        return {
            "total_entries": len(self._entries),
            "entries_by_kind": per_kind,
            "total_tokens": total_tokens,
            **self._stats,
        }

    def _coerce(self, kind: EntityKind, data: ItemData) -> Any:
        """Validate ``data`` into the payload model for ``kind``."""
        model = self._payload_types[kind]
        if isinstance(data, model):
            return data
        if isinstance(data, Mapping):
            try:
                return model.model_validate(data)
            except ValueError as e:
                raise InvalidPayloadError(f"Invalid {kind.value} payload: {e}") from e
        raise InvalidPayloadError(
            f"Expected {model.__name__} for kind {kind.value!r}, got {type(data).__name__}"
        )

    def _position_of(self, item_id: str, kind: EntityKind) -> Optional[int]:
        for position, entry in enumerate(self._entries):
            if entry.id == item_id and entry.kind == kind.value:
                return position
        return None

    def _title_of(self, kind: EntityKind, item_id: Optional[str]) -> Optional[str]:
        if not item_id:
            return None
        for entry in self._entries:
            if entry.id == item_id and entry.kind == kind.value:
                return entry.metadata.title
        return None

    def _folder_entry(self, folder: Folder, parent_name: Optional[str]) -> FolderEntry:
        return FolderEntry(
            id=folder.id,
            content=f"{folder.name} {folder.description or ''}",
            tokens=self.tokenizer.create_tokens(folder.name, None, folder.description, folder.tags),
            metadata=FolderMetadata(
                title=folder.name,
                description=folder.description,
                parent_name=parent_name,
                tags=list(folder.tags),
                created_at=folder.created_at,
                updated_at=folder.updated_at,
                parent_id=folder.parent_id,
                color=folder.color,
                is_bookmarked=folder.is_bookmarked,
            ),
        )

    def _set_entry(self, flashcard_set: FlashcardSet, folder_name: Optional[str]) -> SetEntry:
        card_text = flashcard_set.card_text()
        return SetEntry(
            id=flashcard_set.id,
            content=f"{flashcard_set.title} {flashcard_set.description or ''} {card_text}",
            tokens=self.tokenizer.create_tokens(
                flashcard_set.title, card_text, flashcard_set.description, flashcard_set.tags
            ),
            metadata=SetMetadata(
                title=flashcard_set.title,
                description=flashcard_set.description,
                parent_name=folder_name,
                tags=list(flashcard_set.tags),
                created_at=flashcard_set.created_at,
                updated_at=flashcard_set.updated_at,
                folder_id=flashcard_set.folder_id,
                is_bookmarked=flashcard_set.is_bookmarked,
                card_count=len(flashcard_set.cards),
            ),
        )

    def _card_entry(self, card: Card, flashcard_set: FlashcardSet) -> CardEntry:
        # Cards have no timestamps or tags of their own and inherit the set's
        return CardEntry(
            id=card.id,
            content=f"{card.term} {card.definition}",
            tokens=self.tokenizer.create_tokens(card.term, card.definition),
            metadata=CardMetadata(
                title=card.term,
                description=card.definition,
                parent_name=flashcard_set.title,
                tags=list(flashcard_set.tags),
                created_at=flashcard_set.created_at,
                updated_at=flashcard_set.updated_at,
                set_id=flashcard_set.id,
            ),
        )

    def _persist(self) -> None:
        """Write a full snapshot of the index; failures are logged, never raised."""
        key = self.settings.index_key
        try:
            payload = IndexSnapshot.dump_json(self._entries, by_alias=True).decode("utf-8")
            self.store.set(key, payload)
        except Exception as e:
            logger.error("Failed to persist search index", key=key, error=str(e))
