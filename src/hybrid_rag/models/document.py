"""
Document models for the RAG pipeline.

These represent data at each stage:
  SourceDocument (submitted) → Source + Passage (stored) → RetrievalCandidate (retrieved + scored)
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceType(str, Enum):
    """Kind of ingested document."""

    VIDEO = "VIDEO"
    ARTICLE = "ARTICLE"


_TYPE_ALIASES = {
    "video": SourceType.VIDEO,
    "youtube": SourceType.VIDEO,
    "article": SourceType.ARTICLE,
    "blog": SourceType.ARTICLE,
    "post": SourceType.ARTICLE,
}

# URL values the upload forms used when no link was available
_PLACEHOLDER_URLS = {"", "#"}


def _coerce_source_type(value):
    if isinstance(value, SourceType):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _TYPE_ALIASES:
            return _TYPE_ALIASES[key]
    raise ValueError(
        f"Unknown source type: {value!r}. Expected one of: "
        f"{', '.join(sorted(_TYPE_ALIASES))}"
    )


def _clean_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return None if value in _PLACEHOLDER_URLS else value


class Source(BaseModel):
    """
    One ingested document (an article or a video transcript).

    The id is generated at ingestion and is the canonical identity used
    for citations. Title and url are user-editable and never used as keys.
    """

    id: str = Field(description="Generated, stable source identifier")
    type: SourceType = Field(default=SourceType.ARTICLE)
    title: str = Field(description="Display title")
    url: Optional[str] = Field(default=None, description="Link to the original, if any")
    date: Optional[dt.date] = Field(default=None, description="Publication date")
    chunk_count: int = Field(default=0, ge=0, description="Number of stored passages")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        return _coerce_source_type(value)

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value):
        return _clean_url(value)


class Passage(BaseModel):
    """
    A bounded slice of a source document — the unit of retrieval.

    Created once by the chunker, never mutated. embedding stays None
    when the embedding call failed; the passage is still stored so the
    keyword leg can find it.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable passage identifier")
    parent_source_id: str = Field(description="Id of the Source this passage belongs to")
    chunk_index: int = Field(default=0, ge=0, description="Position within the source")
    text: str = Field(min_length=1, description="Passage content")
    embedding: Optional[list[float]] = Field(
        default=None,
        description="Vector embedding, absent if embedding failed",
    )
    start_time: Optional[str] = Field(
        default=None,
        description="Timestamp marker (e.g. '02:30') for time-coded media",
    )


class SourceDocument(BaseModel):
    """
    Ingestion input, validated at the boundary.

    Malformed metadata is rejected here instead of leaking half-empty
    fields into ranking. Type aliases such as "youtube" or "blog" are
    coerced to SourceType.
    """

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    type: SourceType = Field(default=SourceType.ARTICLE)
    url: Optional[str] = None
    date: Optional[dt.date] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        return _coerce_source_type(value)

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, value):
        return _clean_url(value)

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("date", mode="before")
    @classmethod
    def blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RetrievalCandidate(BaseModel):
    """
    A passage with the signals collected for one query.

    vector_score comes from the vector leg (cosine similarity),
    keyword_hit from the keyword leg. The ranker folds both, plus any
    boosts, into fused_score.
    """

    passage: Passage
    source: Source
    vector_score: Optional[float] = Field(
        default=None,
        description="Cosine similarity in [-1, 1], if the vector leg found it",
    )
    keyword_hit: bool = Field(default=False, description="Found by the keyword leg")
    fused_score: float = Field(default=0.0, description="Final ranking score")
    rank: int = Field(default=0, description="Position in the result list")
