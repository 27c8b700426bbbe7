"""
Hybrid RAG — a retrieval-augmented chat assistant core.

Quick start:
    from hybrid_rag import HybridRAG

    rag = HybridRAG()
    rag.ingest({"title": "Cebu Hopping Tour", "content": text, "type": "blog"})
    response = rag.answer("세부 호핑투어")
    print(response.answer)

Two techniques available:
    - HybridRAG:       vector + keyword retrieval, score fusion, citations (LangGraph)
    - FullContextRAG:  the whole knowledge base in one prompt
"""

from hybrid_rag.config import (
    ChunkingConfig,
    DocumentStoreConfig,
    EmbeddingConfig,
    LLMConfig,
    RankerConfig,
    RetrieverConfig,
    ToolkitConfig,
    WebSearchConfig,
)
from hybrid_rag.techniques import FullContextRAG, HybridRAG, get_technique

__all__ = [
    # Techniques (public API)
    "HybridRAG",
    "FullContextRAG",
    "get_technique",
    # Config
    "ChunkingConfig",
    "DocumentStoreConfig",
    "EmbeddingConfig",
    "LLMConfig",
    "RankerConfig",
    "RetrieverConfig",
    "ToolkitConfig",
    "WebSearchConfig",
]

__version__ = "0.1.0"
