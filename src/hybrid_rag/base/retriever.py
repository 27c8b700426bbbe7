"""
Abstract base class for retrievers.

A retriever takes a query and returns candidate passages from the
document store. Hybrid retrieval has two legs that want different
inputs — the vector leg needs the query embedding, the keyword leg the
raw text — so the contract passes both and each leg uses what it needs.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hybrid_rag.models.result import RetrievalResult


class BaseRetriever(ABC):
    """
    Contract for retrievers.

    Every retriever returns a RetrievalResult which wraps the candidates
    plus metadata about the retrieval (query used, strategy, candidate
    count, failed legs). Retrievers are read-only against the store.
    """

    @abstractmethod
    def retrieve(
        self,
        query: str,
        query_vector: Optional[list[float]] = None,
    ) -> RetrievalResult:
        """
        Retrieve candidate passages for a query.

        Args:
            query: Natural language query.
            query_vector: Embedding of the query, or None if embedding failed.

        Returns:
            RetrievalResult with candidates and retrieval metadata.
        """
        ...
