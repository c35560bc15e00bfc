"""Query models accepted by the search engine."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .entities import EntityKind, ensure_utc


class SortBy(str, Enum):
    RELEVANCE = "relevance"
    DATE = "date"
    NAME = "name"
    TYPE = "type"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DateRange(BaseModel):
    """Inclusive range over an entry's last modification time."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def validate_bounds(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_order(self) -> "DateRange":
        """Reject ranges whose start lies after their end."""
        if self.start > self.end:
            raise ValueError("Date range start must not be after its end")
        return self

    def contains(self, moment: datetime) -> bool:
        return self.start <= ensure_utc(moment) <= self.end


class SearchFilter(BaseModel):
    """Structured filters applied before scoring."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Optional[List[EntityKind]] = Field(
        None, validation_alias=AliasChoices("kind", "type"), description="Entity kinds to keep"
    )
    date_range: Optional[DateRange] = Field(None, alias="dateRange")
    tags: Optional[List[str]] = Field(None, description="Keep entries carrying any of these tags")
    has_bookmark: Optional[bool] = Field(None, alias="hasBookmark")
    color: Optional[str] = Field(None, description="Keep folders of this color")
    parent_id: Optional[str] = Field(None, alias="parentId", description="Keep direct children of this entity")

    def is_empty(self) -> bool:
        """Return True when no filter field has been set."""
        return all(getattr(self, name) is None for name in type(self).model_fields)


class SearchQuery(BaseModel):
    """Free-text query plus filters, ordering and truncation."""

    model_config = ConfigDict(populate_by_name=True)

    free_text: str = Field(
        default="",
        validation_alias=AliasChoices("free_text", "freeText", "query"),
        description="Free-text query",
    )
    filters: SearchFilter = Field(
        default_factory=SearchFilter, validation_alias=AliasChoices("filters", "filter")
    )
    sort_by: SortBy = Field(default=SortBy.RELEVANCE, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.DESC, alias="sortOrder")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of results")

    @field_validator("free_text", mode="before")
    @classmethod
    def validate_free_text(cls, v: Optional[str]) -> str:
        """Treat a missing query string as an empty one."""
        return v or ""

    def has_intent(self) -> bool:
        """A query must carry free text or at least one filter."""
        return bool(self.free_text.strip()) or not self.filters.is_empty()
