"""Entity snapshots consumed by the index builder."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, Enum):
    """Kinds of searchable entities."""

    FOLDER = "folder"
    SET = "set"
    CARD = "card"


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TimestampedModel(BaseModel):
    """Base for models carrying creation and modification timestamps."""

    model_config = ConfigDict(populate_by_name=True)

    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last modification timestamp")

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime) -> datetime:
        """Normalize timestamps to timezone-aware values."""
        return ensure_utc(v)


class Folder(TimestampedModel):
    """A folder grouping study sets, possibly nested under another folder."""

    id: str = Field(..., min_length=1, description="Folder identifier")
    name: str = Field(..., description="Folder name")
    description: Optional[str] = Field(None, description="Folder description")
    parent_id: Optional[str] = Field(None, alias="parentId", description="Parent folder identifier")
    color: Optional[str] = Field(None, description="Folder color name")
    is_bookmarked: bool = Field(default=False, alias="isBookmarked")
    tags: List[str] = Field(default_factory=list, description="User tags")


class Card(BaseModel):
    """A single term/definition pair inside a study set."""

    id: str = Field(..., min_length=1, description="Card identifier")
    term: str = Field(..., description="Card term")
    definition: str = Field(..., description="Card definition")


class FlashcardSet(TimestampedModel):
    """A study set and the cards it owns."""

    id: str = Field(..., min_length=1, description="Set identifier")
    title: str = Field(..., description="Set title")
    description: Optional[str] = Field(None, description="Set description")
    cards: List[Card] = Field(default_factory=list)
    folder_id: Optional[str] = Field(None, alias="folderId", description="Owning folder identifier")
    is_bookmarked: bool = Field(default=False, alias="isBookmarked")
    tags: List[str] = Field(default_factory=list, description="User tags")

    def card_text(self) -> str:
        """Concatenate every card's term and definition."""
        return " ".join(f"{card.term} {card.definition}" for card in self.cards)


class SetCard(BaseModel):
    """A card together with the set that owns it, used for card updates."""

    model_config = ConfigDict(populate_by_name=True)

    card: Card
    owner: FlashcardSet = Field(..., alias="set", description="Set owning the card")
