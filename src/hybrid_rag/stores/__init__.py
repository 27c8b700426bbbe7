"""
Document store backends and factory.

Usage:
    from hybrid_rag.stores import create_document_store
    from hybrid_rag.config import DocumentStoreConfig

    store = create_document_store(DocumentStoreConfig())                    # in-memory
    store = create_document_store(DocumentStoreConfig(backend="supabase"))  # Supabase
"""

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.config import DocumentStoreConfig, StoreBackend

from .memory import InMemoryDocumentStore, cosine_similarity
from .supabase import SupabaseDocumentStore, sanitize_token


def create_document_store(config: DocumentStoreConfig) -> BaseDocumentStore:
    """
    Create the document store selected by config.backend.

    Raises:
        ValueError: If the backend is not recognized or is missing credentials.
    """
    if config.backend == StoreBackend.MEMORY:
        return InMemoryDocumentStore()

    elif config.backend == StoreBackend.SUPABASE:
        return SupabaseDocumentStore.from_config(config)

    else:
        raise ValueError(
            f"Unknown document store backend: '{config.backend}'. "
            f"Supported: 'memory', 'supabase'."
        )


__all__ = [
    "create_document_store",
    "InMemoryDocumentStore",
    "SupabaseDocumentStore",
    "cosine_similarity",
    "sanitize_token",
]
