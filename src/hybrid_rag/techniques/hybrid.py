"""
Hybrid RAG: the default answering technique.

This is the main entry point of the package:

    from hybrid_rag.techniques import HybridRAG

    rag = HybridRAG()
    rag.ingest({"title": "Cebu Hopping Tour", "content": text, "type": "blog"})
    response = rag.answer("세부 호핑투어", use_web_search=True)
    print(response.answer)
    response.model_dump(by_alias=True)   # the JSON the chat UI consumes

Every collaborator can be injected (store, embeddings, llm, web
searcher); anything not passed is built from ToolkitConfig. The answer
path runs through the LangGraph graph in graphs/hybrid.py and never
raises for remote failures.
"""

import logging
from typing import Optional, Union

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.base.technique import BaseTechnique
from hybrid_rag.config import ToolkitConfig
from hybrid_rag.generation.context import ContextAssembler
from hybrid_rag.generation.generate import GroundedGenerator
from hybrid_rag.generation.prompts import load_system_prompt
from hybrid_rag.generation.web import WebSearcher
from hybrid_rag.graphs.hybrid import build_hybrid_graph
from hybrid_rag.indexing.chunking import get_chunker
from hybrid_rag.indexing.embeddings import EmbeddingAdapter, get_embedding_model
from hybrid_rag.indexing.ingestion import IngestionPipeline
from hybrid_rag.models.document import RetrievalCandidate, Source, SourceDocument
from hybrid_rag.models.result import (
    ChatResponse,
    DebugSnippet,
    GenerationResult,
    IngestionReport,
    SourceReference,
)
from hybrid_rag.retrieval.reranking import FusionRanker
from hybrid_rag.retrieval.search import HybridRetriever
from hybrid_rag.stores import create_document_store
from hybrid_rag.utils.helpers import get_llm, model_label, truncate

logger = logging.getLogger(__name__)


def build_response(
    generation: GenerationResult,
    citations,
    web,
    candidates: list[RetrievalCandidate],
    snippet_chars: int,
    technique: str,
) -> ChatResponse:
    """
    Shape the final ChatResponse.

    A failed generation carries no sources: there is no answer text for
    them to support. Debug snippets are kept for diagnosis.
    """
    debug = [
        DebugSnippet(
            score=c.fused_score,
            text=truncate(c.passage.text, snippet_chars),
            source_title=c.source.title,
        )
        for c in candidates
    ]
    if generation.failed:
        return ChatResponse(answer=generation.answer, debug_snippets=debug, technique=technique)

    return ChatResponse(
        answer=generation.answer,
        sources=[SourceReference.from_citation(c) for c in citations],
        web_sources=list(web.sources) if web is not None and web.ok else [],
        debug_snippets=debug,
        technique=technique,
    )


class HybridRAG(BaseTechnique):
    """
    Embed → hybrid retrieve → fuse → assemble (+ web search) → generate.

    Also owns ingestion and source management for its store, so one
    object covers the whole lifecycle of a knowledge base.
    """

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        store: Optional[BaseDocumentStore] = None,
        embeddings: Optional[Embeddings] = None,
        llm: Optional[BaseChatModel] = None,
        web_searcher: Optional[WebSearcher] = None,
    ):
        """
        Args:
            config: Full configuration. Defaults to ToolkitConfig().
            store: Document store. Built from config.store if omitted.
            embeddings: LangChain Embeddings. Built from config.embedding if omitted.
            llm: Chat model for answers and web search. Built from config.llm if omitted.
            web_searcher: Web searcher. Defaults to one using llm.
        """
        self._config = config or ToolkitConfig()
        cfg = self._config

        self._store = store or create_document_store(cfg.store)
        self._embedder = EmbeddingAdapter(embeddings or get_embedding_model(cfg.embedding))
        self._llm = llm or get_llm(cfg.llm)
        self._web_searcher = web_searcher or WebSearcher(self._llm, cfg.web_search)

        self._generator = GroundedGenerator(self._llm, model_label(cfg.llm))
        self._graph = build_hybrid_graph(
            embedder=self._embedder,
            retriever=HybridRetriever(self._store, cfg.retriever),
            ranker=FusionRanker(cfg.ranker),
            assembler=ContextAssembler(),
            generator=self._generator,
            web_searcher=self._web_searcher,
        )
        self._pipeline = IngestionPipeline(
            store=self._store,
            embedder=self._embedder,
            chunker=get_chunker(cfg.chunking),
            embed_concurrency=cfg.embed_concurrency,
        )

    @property
    def store(self) -> BaseDocumentStore:
        return self._store

    # --- query path ---

    def _initial_state(
        self,
        query: str,
        system_instruction: Optional[str],
        use_web_search: bool,
    ) -> dict:
        return {
            "query": query,
            "system_instruction": system_instruction or load_system_prompt(self._store),
            "use_web_search": use_web_search,
        }

    def _to_response(self, state: dict) -> ChatResponse:
        context = state["context"]
        ranked = state["ranked"]
        if ranked.failed_legs:
            logger.warning("Answered with degraded retrieval: %s", ranked.failed_legs)

        return build_response(
            generation=state["generation"],
            citations=context.citations,
            web=state.get("web"),
            candidates=ranked.candidates,
            snippet_chars=self._config.debug_snippet_chars,
            technique="hybrid",
        )

    def answer(
        self,
        query: str,
        system_instruction: Optional[str] = None,
        use_web_search: bool = False,
    ) -> ChatResponse:
        """
        Answer a question from the knowledge base, optionally cross-checked
        against the web.

        Args:
            query: The user's question.
            system_instruction: Overrides the saved/default system prompt.
            use_web_search: Run the grounded web lookup alongside retrieval.

        Returns:
            ChatResponse with the answer, cited sources, web sources and
            debug snippets of the ranked passages.
        """
        state = self._graph.invoke(
            self._initial_state(query, system_instruction, use_web_search)
        )
        return self._to_response(state)

    async def aanswer(
        self,
        query: str,
        system_instruction: Optional[str] = None,
        use_web_search: bool = False,
    ) -> ChatResponse:
        """Async answer(). Cancelling the awaiting task stops the graph run."""
        state = await self._graph.ainvoke(
            self._initial_state(query, system_instruction, use_web_search)
        )
        return self._to_response(state)

    # --- knowledge base management ---

    def ingest(self, document: Union[SourceDocument, dict]) -> IngestionReport:
        return self._pipeline.ingest(document)

    def list_sources(self) -> list[Source]:
        return self._store.list_sources()

    def delete_source(self, source_id: str) -> int:
        removed = self._store.delete_source(source_id)
        logger.info("Deleted source %s (%d passages)", source_id, removed)
        return removed
