"""
Answering techniques — the public API of the hybrid-rag package.

Usage:
    from hybrid_rag.techniques import HybridRAG, get_technique

    rag = HybridRAG()
    response = rag.answer("세부 호핑투어")

    rag = get_technique(ToolkitConfig(technique="full_context"), store=store)
"""

from typing import Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.base.technique import BaseTechnique
from hybrid_rag.config import Technique, ToolkitConfig

from .full_context import FullContextRAG
from .hybrid import HybridRAG


def get_technique(
    config: Optional[ToolkitConfig] = None,
    store: Optional[BaseDocumentStore] = None,
    embeddings: Optional[Embeddings] = None,
    llm: Optional[BaseChatModel] = None,
) -> BaseTechnique:
    """
    Factory that returns the technique selected by config.technique.

    Raises:
        ValueError: If the technique is not recognized.
    """
    config = config or ToolkitConfig()

    if config.technique == Technique.HYBRID:
        return HybridRAG(config=config, store=store, embeddings=embeddings, llm=llm)

    elif config.technique == Technique.FULL_CONTEXT:
        return FullContextRAG(config=config, store=store, llm=llm)

    else:
        raise ValueError(
            f"Unknown technique: '{config.technique}'. "
            f"Supported: 'hybrid', 'full_context'."
        )


__all__ = [
    "get_technique",
    "HybridRAG",
    "FullContextRAG",
]
