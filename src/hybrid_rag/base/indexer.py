"""
Abstract base class for chunking.

A chunker turns one document's raw text into ordered Passages. It is
kept separate from ingestion so the splitting strategy can be swapped
without touching embedding or persistence:
    chunker = get_chunker(config.chunking)
    passages = chunker.chunk(text, parent_source_id="src-1")
"""

from abc import ABC, abstractmethod

from hybrid_rag.config import ChunkingConfig
from hybrid_rag.models.document import Passage


class BaseChunker(ABC):
    """
    Contract for chunkers.

    Every chunker receives a ChunkingConfig so the caller controls
    chunk_size, overlap and strategy-specific knobs. Passage ids are
    derived from the parent source id and the chunk index, so the same
    text always yields the same ids.
    """

    def __init__(self, config: ChunkingConfig):
        self.config = config

    @abstractmethod
    def split_text(self, text: str) -> list[str]:
        """
        Split raw text into passage strings.

        Args:
            text: Full document text.

        Returns:
            Ordered, non-empty passage texts.
        """
        ...

    def chunk(self, text: str, parent_source_id: str) -> list[Passage]:
        """
        Split text and wrap each piece as a Passage of parent_source_id.

        Args:
            text: Full document text.
            parent_source_id: Id of the Source the passages belong to.

        Returns:
            Ordered list of Passages with chunk_index set.
        """
        return [
            Passage(
                id=f"{parent_source_id}:{i}",
                parent_source_id=parent_source_id,
                chunk_index=i,
                text=piece,
            )
            for i, piece in enumerate(self.split_text(text))
        ]
