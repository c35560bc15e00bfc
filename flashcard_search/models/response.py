"""Result models returned by the search engine."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entities import EntityKind


class SearchResult(BaseModel):
    """Individual search result."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Identifier of the matched entity")
    kind: EntityKind = Field(..., description="Kind of the matched entity")
    title: str = Field(..., description="Display title")
    description: Optional[str] = Field(None, description="Display description")
    snippet: Optional[str] = Field(None, description="Card content, only set for cards")
    parent_name: Optional[str] = Field(None, alias="parentName", description="Name of the containing entity")
    relevance_score: float = Field(..., ge=0.0, alias="relevanceScore", description="Relevance score")
    matched_terms: List[str] = Field(default_factory=list, alias="matchedTerms", description="Query terms that matched")
    last_modified: datetime = Field(..., alias="lastModified", description="Last modification of the entity")
