"""
Hybrid answer LangGraph graph.

Graph structure:

    START ─→ internal ─────┐
      └───→ web_search ────┴→ generate → END

    internal = compiled subgraph:
        START → embed_query → retrieve → rank → assemble → END

LangGraph finishes a superstep only when every node in it has returned.
The whole internal chain is therefore one node of the outer graph, so
the web lookup overlaps with embedding, retrieval, ranking and assembly
instead of holding back the step after embed_query. generate waits for
both branches.

Every node degrades instead of raising: the embedder returns None, the
retriever records failed legs, the web searcher returns ok=False and the
generator falls back to an apology. A compiled graph therefore always
ends with a GenerationResult in state["generation"].

Usage:
    from hybrid_rag.graphs.hybrid import build_hybrid_graph

    graph = build_hybrid_graph(embedder, retriever, ranker, assembler, generator, searcher)
    state = graph.invoke({"query": "세부 호핑투어", "use_web_search": False})
    print(state["generation"].answer)
"""

import logging
from typing import Optional

from langgraph.graph import END, START, StateGraph

from hybrid_rag.base.retriever import BaseRetriever
from hybrid_rag.generation.context import ContextAssembler
from hybrid_rag.generation.generate import GroundedGenerator
from hybrid_rag.generation.web import WebSearcher
from hybrid_rag.graphs.state import AnswerState, RetrievalState
from hybrid_rag.indexing.embeddings import EmbeddingAdapter
from hybrid_rag.retrieval.reranking import FusionRanker

logger = logging.getLogger(__name__)

_INTERNAL_KEYS = ("query_vector", "retrieval", "ranked", "context")


def build_retrieval_graph(
    embedder: EmbeddingAdapter,
    retriever: BaseRetriever,
    ranker: FusionRanker,
    assembler: ContextAssembler,
):
    """Build and compile the internal chain: embed_query → retrieve → rank → assemble."""

    def embed_query(state: RetrievalState) -> dict:
        return {"query_vector": embedder.embed(state["query"])}

    def retrieve(state: RetrievalState) -> dict:
        retrieval = retriever.retrieve(state["query"], state.get("query_vector"))
        return {"retrieval": retrieval}

    def rank(state: RetrievalState) -> dict:
        return {"ranked": ranker.rank(state["retrieval"], state["query"])}

    def assemble(state: RetrievalState) -> dict:
        return {"context": assembler.assemble(state["ranked"].candidates)}

    graph = StateGraph(RetrievalState)

    graph.add_node("embed_query", embed_query)
    graph.add_node("retrieve", retrieve)
    graph.add_node("rank", rank)
    graph.add_node("assemble", assemble)

    graph.add_edge(START, "embed_query")
    graph.add_edge("embed_query", "retrieve")
    graph.add_edge("retrieve", "rank")
    graph.add_edge("rank", "assemble")
    graph.add_edge("assemble", END)

    return graph.compile()


def build_hybrid_graph(
    embedder: EmbeddingAdapter,
    retriever: BaseRetriever,
    ranker: FusionRanker,
    assembler: ContextAssembler,
    generator: GroundedGenerator,
    web_searcher: Optional[WebSearcher] = None,
):
    """
    Build and compile the hybrid answer graph.

    Args:
        embedder: Embeds the query (best effort).
        retriever: Usually a HybridRetriever.
        ranker: Fuses and truncates the retrieval result.
        assembler: Builds the numbered context and citations.
        generator: Produces the final answer.
        web_searcher: Optional; without it web search requests are ignored.

    Returns:
        A compiled LangGraph that accepts
        {"query", "system_instruction", "use_web_search"} and returns the
        full AnswerState.
    """
    retrieval_graph = build_retrieval_graph(embedder, retriever, ranker, assembler)

    # --- Node functions ---

    def internal(state: AnswerState) -> dict:
        result = retrieval_graph.invoke({"query": state["query"]})
        return {key: result.get(key) for key in _INTERNAL_KEYS}

    def web_search(state: AnswerState) -> dict:
        if not state.get("use_web_search"):
            return {"web": None}
        if web_searcher is None:
            logger.warning("Web search requested but no web searcher is configured")
            return {"web": None}
        return {"web": web_searcher.search(state["query"])}

    def generate(state: AnswerState) -> dict:
        generation = generator.generate_or_apologize(
            query=state["query"],
            context=state["context"],
            system_instruction=state.get("system_instruction"),
            web=state.get("web"),
            web_requested=bool(state.get("use_web_search")),
        )
        return {"generation": generation}

    # --- Wire the graph ---

    graph = StateGraph(AnswerState)

    graph.add_node("internal", internal)
    graph.add_node("web_search", web_search)
    graph.add_node("generate", generate)

    graph.add_edge(START, "internal")
    graph.add_edge(START, "web_search")
    # generate runs once both branches are done
    graph.add_edge(["internal", "web_search"], "generate")
    graph.add_edge("generate", END)

    return graph.compile()
