"""
Pydantic models for the ragbooks application.
"""

from datetime import date, datetime, timezone
from typing import List, Union
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from . import settings


class Book(BaseModel):
    """A book in the corpus. Replaced, never edited."""

    id: int = Field(gt=0, description="Unique id assigned at insertion")
    title: str
    author: str = ""
    description: str = ""
    content: str = Field(default="", description="Full text used for fallback matching")
    category: str = ""
    published_year: int = Field(default=0, alias="publishedYear")
    tags: List[str] = Field(default_factory=list)
    embedding: List[float] = Field(default_factory=list, description="Placeholder vector, never interpreted")

    class Config:
        """Pydantic configuration."""
        frozen = True
        populate_by_name = True


class NewBook(BaseModel):
    """User-supplied fields for a book that has not been assigned an id yet."""

    title: str
    author: str
    content: str
    description: str = ""
    category: str = ""
    published_year: int = Field(default_factory=lambda: date.today().year, alias="publishedYear")
    tags: List[str] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("title", "author", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Union[str, List[str], None]) -> List[str]:
        # Form input arrives as "AI, Machine Learning, ..."
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [tag.strip() for tag in value if tag and tag.strip()]


class Source(BaseModel):
    """A book cited alongside an answer."""

    id: int = Field(description="Id of the referenced book")
    title: str
    relevance: float = Field(ge=0.0, le=1.0)
    excerpt: str = ""


class RagResult(BaseModel):
    """An answer to a question plus the sources it was drawn from."""

    query: str
    response: str
    sources: List[Source] = Field(default_factory=list, max_length=settings.MAX_SOURCES)
    confidence: float = Field(ge=0.0, le=1.0)

    @property
    def source_ids(self) -> List[int]:
        """Book ids of the cited sources, in order."""
        return [source.id for source in self.sources]


class ConversationTurn(BaseModel):
    """One question/answer exchange in the conversation log."""

    id: int = Field(description="Sequence number within the session")
    user: str
    assistant: str
    sources: List[int] = Field(default_factory=list, description="Book ids, may reference missing books")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Session(BaseModel):
    """
    Identity tying a sequence of turns together for the remote service.

    The id never changes; clearing the conversation mints a new Session.
    """

    id: str = Field(default_factory=lambda: uuid4().hex, frozen=True)
    turn_count: int = Field(default=0, ge=0)

    def next_turn_id(self) -> int:
        """Advance the turn counter and return the id for the next turn."""
        self.turn_count += 1
        return self.turn_count
