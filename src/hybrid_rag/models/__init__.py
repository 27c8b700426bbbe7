"""
Pydantic models shared across the package.

Import from here rather than reaching into submodules:
    from hybrid_rag.models import Passage, RetrievalCandidate, ChatResponse
"""

from .document import (
    Passage,
    RetrievalCandidate,
    Source,
    SourceDocument,
    SourceType,
)
from .result import (
    AssembledContext,
    ChatRequest,
    ChatResponse,
    Citation,
    DebugSnippet,
    GenerationResult,
    IngestionReport,
    RetrievalResult,
    SourceReference,
    WebSearchResult,
    WebSource,
)

__all__ = [
    # Document
    "Passage",
    "RetrievalCandidate",
    "Source",
    "SourceDocument",
    "SourceType",
    # Result
    "AssembledContext",
    "ChatRequest",
    "ChatResponse",
    "Citation",
    "DebugSnippet",
    "GenerationResult",
    "IngestionReport",
    "RetrievalResult",
    "SourceReference",
    "WebSearchResult",
    "WebSource",
]
