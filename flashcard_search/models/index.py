"""Index entry models, one variant per entity kind."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

from .entities import ensure_utc


class EntryMetadata(BaseModel):
    """Display metadata shared by all index entries."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Display title")
    description: Optional[str] = Field(None, description="Display description")
    parent_name: Optional[str] = Field(None, alias="parentName", description="Name of the containing entity")
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime) -> datetime:
        """Normalize timestamps to timezone-aware values."""
        return ensure_utc(v)


class FolderMetadata(EntryMetadata):
    parent_id: Optional[str] = Field(None, alias="parentId")
    color: Optional[str] = None
    is_bookmarked: bool = Field(default=False, alias="isBookmarked")


class SetMetadata(EntryMetadata):
    folder_id: Optional[str] = Field(None, alias="folderId")
    is_bookmarked: bool = Field(default=False, alias="isBookmarked")
    card_count: int = Field(default=0, ge=0, alias="cardCount")


class CardMetadata(EntryMetadata):
    set_id: Optional[str] = Field(None, alias="setId", description="Identifier of the owning set")


class IndexEntryBase(BaseModel, ABC):
    """Fields common to every index entry.

    Subclasses answer the kind-specific filter questions (bookmark flag,
    color, parent reference) so every filter site has to handle each kind.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Identifier of the source entity")
    content: str = Field(default="", description="Concatenated display text")
    tokens: Set[str] = Field(default_factory=set, description="Bare and field-scoped tokens")

    @field_serializer("tokens")
    def serialize_tokens(self, tokens: Set[str]) -> List[str]:
        return sorted(tokens)

    @property
    @abstractmethod
    def is_bookmarked(self) -> bool:
        ...

    @property
    @abstractmethod
    def color(self) -> Optional[str]:
        ...

    @property
    @abstractmethod
    def parent_id(self) -> Optional[str]:
        ...


class FolderEntry(IndexEntryBase):
    kind: Literal["folder"] = "folder"
    metadata: FolderMetadata

    @property
    def is_bookmarked(self) -> bool:
        return self.metadata.is_bookmarked

    @property
    def color(self) -> Optional[str]:
        return self.metadata.color

    @property
    def parent_id(self) -> Optional[str]:
        return self.metadata.parent_id


class SetEntry(IndexEntryBase):
    kind: Literal["set"] = "set"
    metadata: SetMetadata

    @property
    def is_bookmarked(self) -> bool:
        return self.metadata.is_bookmarked

    @property
    def color(self) -> Optional[str]:
        return None

    @property
    def parent_id(self) -> Optional[str]:
        return self.metadata.folder_id


class CardEntry(IndexEntryBase):
    kind: Literal["card"] = "card"
    metadata: CardMetadata

    @property
    def is_bookmarked(self) -> bool:
        return False

    @property
    def color(self) -> Optional[str]:
        return None

    @property
    def parent_id(self) -> Optional[str]:
        return self.metadata.set_id


IndexEntry = Annotated[Union[FolderEntry, SetEntry, CardEntry], Field(discriminator="kind")]

# Serialized form of the whole index: a JSON array of entries
IndexSnapshot = TypeAdapter(List[IndexEntry])
