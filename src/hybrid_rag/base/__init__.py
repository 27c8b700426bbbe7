"""
Abstract base classes defining the contract for each pipeline stage.

Import from here:
    from hybrid_rag.base import BaseChunker, BaseDocumentStore, BaseRetriever
"""

from .indexer import BaseChunker
from .retriever import BaseRetriever
from .store import BaseDocumentStore
from .technique import BaseTechnique

__all__ = [
    "BaseChunker",
    "BaseDocumentStore",
    "BaseRetriever",
    "BaseTechnique",
]
