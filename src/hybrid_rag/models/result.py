"""
Result models for retrieval, assembly and generation outputs.

Also holds the chat contract (ChatRequest / ChatResponse) that the
presentation layer consumes. Those serialise with camelCase aliases:
    response.model_dump(by_alias=True)
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .document import RetrievalCandidate, Source, SourceType


# ---------------------------------------------------------------------------
# Retrieval results
# ---------------------------------------------------------------------------

class RetrievalResult(BaseModel):
    """
    Output of a retrieval leg, the hybrid retriever, or the ranker.

    failed_legs names the legs that raised, so a degraded result can be
    told apart from a genuinely empty one.
    """

    candidates: list[RetrievalCandidate] = Field(default_factory=list)
    query_used: str = Field(default="", description="Query text the result was produced for")
    strategy: str = Field(default="hybrid", description="Which retriever/ranker produced this")
    total_candidates: int = Field(
        default=0,
        description="How many candidates were considered before dedup/truncation",
    )
    failed_legs: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Context assembly
# ---------------------------------------------------------------------------

class Citation(BaseModel):
    """A citation number and the source it points to."""

    index: int = Field(ge=1)
    source: Source


class AssembledContext(BaseModel):
    """
    The numbered context block handed to the model, plus its citations.

    context_block is never an empty string: with no candidates it holds
    an explicit marker so the prompt can tell the model there is no
    internal data.
    """

    context_block: str
    citations: list[Citation] = Field(default_factory=list)
    is_empty: bool = False


# ---------------------------------------------------------------------------
# Web search + generation
# ---------------------------------------------------------------------------

class WebSource(BaseModel):
    """A page the web-grounded search cited."""

    title: str = ""
    url: str


class WebSearchResult(BaseModel):
    """Findings of the optional web search. ok is False when the call failed."""

    text: str = ""
    sources: list[WebSource] = Field(default_factory=list)
    ok: bool = True


class GenerationResult(BaseModel):
    """Output of the generation call."""

    answer: str = Field(description="The generated answer")
    model: str = Field(default="", description="Model that produced this answer")
    failed: bool = Field(default=False, description="True if the answer is the fallback apology")


# ---------------------------------------------------------------------------
# Chat contract
# ---------------------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(_CamelModel):
    """Incoming chat request: {query, systemInstruction, useWebSearch}."""

    query: str = Field(min_length=1)
    system_instruction: Optional[str] = None
    use_web_search: bool = False


class SourceReference(_CamelModel):
    """User-facing entry for one cited source."""

    index: int
    title: str
    url: str = ""
    date: str = ""
    type: SourceType = SourceType.ARTICLE

    @classmethod
    def from_citation(cls, citation: Citation) -> "SourceReference":
        source = citation.source
        return cls(
            index=citation.index,
            title=source.title,
            url=source.url or "",
            date=source.date.isoformat() if source.date else "",
            type=source.type,
        )


class DebugSnippet(_CamelModel):
    """One ranked candidate, trimmed for diagnostic display."""

    score: float
    text: str
    source_title: str


class ChatResponse(_CamelModel):
    """
    The complete answer returned for a chat request.

    Always well-formed — failure paths still carry a fallback answer.
    """

    answer: str
    sources: list[SourceReference] = Field(default_factory=list)
    web_sources: list[WebSource] = Field(default_factory=list)
    debug_snippets: list[DebugSnippet] = Field(default_factory=list)
    technique: str = Field(default="hybrid", exclude=True)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class IngestionReport(BaseModel):
    """What happened when one source document was ingested."""

    source: Source
    passages_total: int = 0
    passages_embedded: int = 0
    embedding_failures: int = 0
