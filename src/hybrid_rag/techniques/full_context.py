"""
Full-context RAG: skip retrieval, hand the whole knowledge base to the model.

Useful for small corpora and long-context models, and as a baseline to
compare the hybrid pipeline against. Every stored passage (up to
full_context_limit) goes through the same ContextAssembler, so
citations and [[n]] markers work exactly as in HybridRAG.

    rag = FullContextRAG(store=store, llm=llm)
    response = rag.answer("세부 호핑투어")
"""

import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.base.technique import BaseTechnique
from hybrid_rag.config import ToolkitConfig
from hybrid_rag.generation.context import ContextAssembler
from hybrid_rag.generation.generate import GroundedGenerator
from hybrid_rag.generation.prompts import FULL_CONTEXT_PROMPT, load_system_prompt
from hybrid_rag.generation.web import WebSearcher
from hybrid_rag.models.result import ChatResponse
from hybrid_rag.stores import create_document_store
from hybrid_rag.techniques.hybrid import build_response
from hybrid_rag.utils.helpers import get_llm, model_label

logger = logging.getLogger(__name__)


class FullContextRAG(BaseTechnique):
    """Load all passages → assemble → (web search) → generate."""

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        store: Optional[BaseDocumentStore] = None,
        llm: Optional[BaseChatModel] = None,
        web_searcher: Optional[WebSearcher] = None,
    ):
        self._config = config or ToolkitConfig()
        cfg = self._config

        self._store = store or create_document_store(cfg.store)
        self._llm = llm or get_llm(cfg.llm)
        self._web_searcher = web_searcher or WebSearcher(self._llm, cfg.web_search)
        self._assembler = ContextAssembler()
        self._generator = GroundedGenerator(
            self._llm, model_label(cfg.llm), prompt=FULL_CONTEXT_PROMPT
        )

    def answer(
        self,
        query: str,
        system_instruction: Optional[str] = None,
        use_web_search: bool = False,
    ) -> ChatResponse:
        try:
            candidates = self._store.list_passages(self._config.full_context_limit)
        except Exception:
            logger.exception("Could not load passages for full-context answer")
            candidates = []

        logger.info("Full-context answer over %d passages", len(candidates))
        context = self._assembler.assemble(candidates)
        web = self._web_searcher.search(query) if use_web_search else None

        generation = self._generator.generate_or_apologize(
            query=query,
            context=context,
            system_instruction=system_instruction or load_system_prompt(self._store),
            web=web,
            web_requested=use_web_search,
        )
        return build_response(
            generation=generation,
            citations=context.citations,
            web=web,
            candidates=candidates,
            snippet_chars=self._config.debug_snippet_chars,
            technique="full_context",
        )
