"""
Candidate retrieval against the document store.

Two legs, each its own BaseRetriever:

    VectorRetriever    nearest passages to the query embedding
    KeywordRetriever   passages whose text or title contains a query token

HybridRetriever runs both concurrently and concatenates their
candidates (vector leg first). It does not score or deduplicate; that
is the ranker's job. A leg that raises is logged and recorded in
failed_legs, and the other leg's candidates are still returned, so a
broken embedding service or a broken text index never takes the whole
query down.

Usage:
    from hybrid_rag.retrieval.search import HybridRetriever
    from hybrid_rag.config import RetrieverConfig

    retriever = HybridRetriever(store, RetrieverConfig())
    result = retriever.retrieve("세부 호핑투어", query_vector=vector)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from hybrid_rag.base.retriever import BaseRetriever
from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.config import RetrieverConfig
from hybrid_rag.models.result import RetrievalResult
from hybrid_rag.retrieval.keywords import extract_keywords

logger = logging.getLogger(__name__)


class VectorRetriever(BaseRetriever):
    """
    Cosine-similarity leg.

    Uses the precomputed query vector. When embedding the query failed
    (query_vector is None) the leg contributes nothing instead of
    calling the store.
    """

    def __init__(self, store: BaseDocumentStore, config: RetrieverConfig = None):
        self._store = store
        self._config = config or RetrieverConfig()

    def retrieve(
        self,
        query: str,
        query_vector: Optional[list[float]] = None,
    ) -> RetrievalResult:
        if not query_vector:
            return RetrievalResult(query_used=query, strategy="vector")

        candidates = self._store.vector_search(
            query_vector,
            k=self._config.vector_fetch_k,
            min_similarity=self._config.min_similarity,
        )
        return RetrievalResult(
            candidates=candidates,
            query_used=query,
            strategy="vector",
            total_candidates=len(candidates),
        )


class KeywordRetriever(BaseRetriever):
    """
    Substring leg.

    Catches exact names and phrases the embedding drifts away from:
    product names, places, Korean compound words. A query with no
    usable tokens yields an empty result.
    """

    def __init__(self, store: BaseDocumentStore, config: RetrieverConfig = None):
        self._store = store
        self._config = config or RetrieverConfig()

    def retrieve(
        self,
        query: str,
        query_vector: Optional[list[float]] = None,
    ) -> RetrievalResult:
        keywords = extract_keywords(query, self._config.max_keywords)
        if not keywords:
            return RetrievalResult(query_used=query, strategy="keyword")

        candidates = self._store.text_search(keywords, k=self._config.keyword_fetch_k)
        return RetrievalResult(
            candidates=candidates,
            query_used=" ".join(keywords),
            strategy="keyword",
            total_candidates=len(candidates),
        )


class HybridRetriever(BaseRetriever):
    """
    Runs the vector and keyword legs concurrently and collects both.

    The two legs are independent store reads, so they go to a two-worker
    thread pool and the retriever waits for both.
    """

    def __init__(self, store: BaseDocumentStore, config: RetrieverConfig = None):
        config = config or RetrieverConfig()
        self._legs: dict[str, BaseRetriever] = {
            "vector": VectorRetriever(store, config),
            "keyword": KeywordRetriever(store, config),
        }

    def _run_leg(
        self,
        name: str,
        query: str,
        query_vector: Optional[list[float]],
    ) -> Optional[RetrievalResult]:
        try:
            return self._legs[name].retrieve(query, query_vector)
        except Exception:
            logger.exception("%s retrieval leg failed", name)
            return None

    def retrieve(
        self,
        query: str,
        query_vector: Optional[list[float]] = None,
    ) -> RetrievalResult:
        with ThreadPoolExecutor(max_workers=len(self._legs)) as pool:
            futures = {
                name: pool.submit(self._run_leg, name, query, query_vector)
                for name in self._legs
            }
            results = {name: future.result() for name, future in futures.items()}

        candidates = []
        failed_legs = []
        for name, result in results.items():
            if result is None:
                failed_legs.append(name)
                continue
            candidates.extend(result.candidates)

        if failed_legs:
            logger.warning("Hybrid retrieval degraded, failed legs: %s", failed_legs)

        return RetrievalResult(
            candidates=candidates,
            query_used=query,
            strategy="hybrid",
            total_candidates=len(candidates),
            failed_legs=failed_legs,
        )
