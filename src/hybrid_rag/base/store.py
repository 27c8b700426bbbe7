"""
Abstract base class for the document store.

The store is an external collaborator: it owns durability, concurrency
and the nearest-neighbour index. The retrieval core only needs the
handful of operations below, so any backend (in-memory, Supabase,
something else) can sit behind it.

Besides passages and sources, the store keeps a small key/value
settings table. Durable state such as the administrator's system
prompt lives there, never in module globals.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hybrid_rag.models.document import Passage, RetrievalCandidate, Source


class BaseDocumentStore(ABC):
    """
    Contract for document stores.

    Read operations return RetrievalCandidates so every caller sees a
    passage together with its source metadata. vector_search fills
    vector_score; text_search sets keyword_hit.
    """

    # --- write path (ingestion) ---

    @abstractmethod
    def add_source(self, source: Source, passages: list[Passage]) -> int:
        """
        Persist a source and its passages.

        Passages without an embedding are stored too; they are only
        reachable through text_search.

        Returns:
            Number of passages written.
        """
        ...

    @abstractmethod
    def delete_source(self, source_id: str) -> int:
        """
        Delete a source and, by cascade, every passage referencing it.

        Returns:
            Number of passages removed.
        """
        ...

    # --- read path (query time) ---

    @abstractmethod
    def vector_search(
        self,
        embedding: list[float],
        k: int,
        min_similarity: float = 0.0,
    ) -> list[RetrievalCandidate]:
        """
        Nearest passages by cosine similarity, best first.

        Args:
            embedding: Query vector.
            k: Maximum number of candidates.
            min_similarity: Candidates below this similarity are dropped.
        """
        ...

    @abstractmethod
    def text_search(self, keywords: list[str], k: int) -> list[RetrievalCandidate]:
        """
        Passages whose text or source title contains any keyword.

        Matching is a case-insensitive substring test. An empty keyword
        list returns no candidates.
        """
        ...

    @abstractmethod
    def list_sources(self) -> list[Source]:
        """All sources, newest first."""
        ...

    @abstractmethod
    def get_source(self, source_id: str) -> Optional[Source]:
        ...

    @abstractmethod
    def list_passages(self, limit: int) -> list[RetrievalCandidate]:
        """
        Up to limit stored passages with their sources, unscored.

        Used by the full-context technique, which skips ranking.
        """
        ...

    # --- settings ---

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete_setting(self, key: str) -> None:
        ...
