"""
LangGraph state definition for the answer graph.

Each node receives the full state, reads what it needs, and returns a
partial update. RetrievalState belongs to the internal subgraph
(embed_query → retrieve → rank → assemble); AnswerState to the outer
graph, where the internal node and the web node write disjoint keys and
so run in the same superstep without a reducer.

Usage:
    from hybrid_rag.graphs.state import AnswerState, RetrievalState
"""

from typing import Optional

from typing_extensions import TypedDict

from hybrid_rag.models.result import (
    AssembledContext,
    GenerationResult,
    RetrievalResult,
    WebSearchResult,
)


class RetrievalState(TypedDict, total=False):
    """State for the internal subgraph: embed_query → retrieve → rank → assemble."""

    query: str
    query_vector: Optional[list[float]]
    retrieval: RetrievalResult
    ranked: RetrievalResult
    context: AssembledContext


class AnswerState(TypedDict, total=False):
    """
    State for the hybrid answer graph.

    Flow: internal (RetrievalState subgraph) ┐
          web_search ───────────────────────┴→ generate

    Fields are populated by different nodes:
        - query, system_instruction, use_web_search:  set at start
        - query_vector, retrieval, ranked, context:  set by internal
        - web:            set by web_search (None when not requested)
        - generation:     set by generate
    """

    # Input
    query: str
    system_instruction: str
    use_web_search: bool

    # Internal branch
    query_vector: Optional[list[float]]
    retrieval: RetrievalResult
    ranked: RetrievalResult
    context: AssembledContext

    # Web branch
    web: Optional[WebSearchResult]

    # After generation
    generation: GenerationResult
