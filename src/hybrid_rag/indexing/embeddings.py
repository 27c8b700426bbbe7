"""
Embedding model factory and the failure-tolerant embedding adapter.

get_embedding_model() is the single place that maps provider strings to
LangChain classes:
    "google"      → GoogleGenerativeAIEmbeddings (API-based, default)
    "openai"      → OpenAIEmbeddings (API-based)
    "huggingface" → HuggingFaceEmbeddings (local sentence-transformers)

EmbeddingAdapter wraps whichever model you get. It is used at ingestion
time (once per passage) and at query time (once per question), and it
never raises: a failed call becomes None so the caller can keep going.

Usage:
    from hybrid_rag.indexing.embeddings import EmbeddingAdapter, get_embedding_model
    from hybrid_rag.config import EmbeddingConfig

    embedder = EmbeddingAdapter(get_embedding_model(EmbeddingConfig()))
    vector = embedder.embed("세부 호핑투어")   # list[float] or None
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from langchain_core.embeddings import Embeddings

from hybrid_rag.config import EmbeddingConfig
from hybrid_rag.utils.helpers import collapse_newlines

logger = logging.getLogger(__name__)


def get_embedding_model(config: EmbeddingConfig) -> Embeddings:
    """
    Factory that returns a LangChain embedding model based on config.

    Each provider has its own LangChain integration package. They are
    imported lazily, inside the branch, so only the package for the
    provider in use needs to be installed.

    Args:
        config: EmbeddingConfig with provider, model_name, and optional model_kwargs.

    Returns:
        A LangChain Embeddings instance ready to call embed_query().

    Raises:
        ValueError: If the provider is not recognized.
        ImportError: If the required package for the provider is not installed.
    """
    provider = config.provider.lower()

    if provider == "google":
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        return GoogleGenerativeAIEmbeddings(
            model=config.model_name,
            **config.model_kwargs,
        )

    elif provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(
            model=config.model_name,
            **config.model_kwargs,
        )

    elif provider == "huggingface":
        try:
            from langchain_huggingface import HuggingFaceEmbeddings
        except ImportError:
            raise ImportError(
                "HuggingFace embeddings require langchain-huggingface. "
                "Install with: pip install hybrid-rag[huggingface]"
            )

        return HuggingFaceEmbeddings(
            model_name=config.model_name,
            model_kwargs=config.model_kwargs,
        )

    else:
        raise ValueError(
            f"Unknown embedding provider: '{config.provider}'. "
            f"Supported: 'google', 'openai', 'huggingface'. "
            f"For other providers, pass a LangChain Embeddings instance directly."
        )


class EmbeddingAdapter:
    """
    Turns text into a vector, or None.

    - Newlines collapse to spaces before the call.
    - Blank text returns None without touching the backend.
    - Any backend error (timeout, rate limit, bad response) is logged
      and returned as None. An ingestion with a few failed passages
      still stores them for keyword search; a query whose embedding
      failed still runs the keyword leg.
    """

    def __init__(self, embeddings: Embeddings):
        self._embeddings = embeddings

    def embed(self, text: str) -> Optional[list[float]]:
        clean = collapse_newlines(text).strip()
        if not clean:
            return None

        try:
            vector = self._embeddings.embed_query(clean)
        except Exception as e:
            logger.warning("Embedding call failed: %s", e)
            return None

        if not vector:
            logger.warning("Embedding call returned no values")
            return None
        return [float(v) for v in vector]

    def embed_many(self, texts: list[str], max_workers: int = 4) -> list[Optional[list[float]]]:
        """
        Embed several texts with bounded parallelism.

        One call per text, at most max_workers in flight, so remote rate
        limits are respected. Output order matches input order; failed
        items are None.
        """
        if not texts:
            return []
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            return list(pool.map(self.embed, texts))
