"""
Configuration for the hybrid RAG assistant.

Split into one config per concern so each stage module only receives
what it needs. ToolkitConfig bundles them all for convenience.

Usage:
    # Full config, pass to a technique
    config = ToolkitConfig()

    # Override specific parts
    config = ToolkitConfig(
        llm=LLMConfig(provider="openai", model_name="gpt-4o-mini"),
        ranker=RankerConfig(top_k=10),
    )

    # Standalone, use just one piece
    chunking = ChunkingConfig(chunk_size=500, chunk_overlap=100)
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load .env from the project root. Runs once at import time, so any
# module that imports the config sees API keys and SUPABASE_* vars.
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


# ---------------------------------------------------------------------------
# Enums for things with a fixed set of choices
# ---------------------------------------------------------------------------

class LLMProvider(str, Enum):
    """
    Supported chat model providers.

    Each provider needs a different LangChain class, so the set is
    closed. Google is the default because web grounding relies on the
    Gemini google_search tool.
    """

    GOOGLE = "google"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class StoreBackend(str, Enum):
    """Supported document store backends."""

    MEMORY = "memory"
    SUPABASE = "supabase"


class Technique(str, Enum):
    """Answering strategies selectable by configuration."""

    HYBRID = "hybrid"
    FULL_CONTEXT = "full_context"


# ---------------------------------------------------------------------------
# Per-concern configs
# ---------------------------------------------------------------------------

class LLMConfig(BaseModel):
    """
    Chat model configuration.

    Used by: generation/generate.py, generation/web.py, techniques/

    timeout and max_retries are handed to the LangChain client, so
    retrying transient failures is the adapter's job, not the
    orchestrator's.
    """

    provider: LLMProvider = Field(
        default=LLMProvider.GOOGLE,
        description="Which chat model provider to use",
    )
    model_name: str = Field(
        default="gemini-2.5-flash",
        description="Model identifier (e.g. 'gemini-2.5-flash', 'gpt-4o-mini')",
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=4000,
        gt=0,
        description="Maximum tokens in the model response",
    )
    timeout: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Retries the client performs on transient errors",
    )


class EmbeddingConfig(BaseModel):
    """
    Embedding model configuration.

    Used by: indexing/embeddings.py

    Provider is an open string; the factory maps known names to
    LangChain classes and raises a clear error for unknown ones.

    Examples:
        EmbeddingConfig()                                        # Gemini text-embedding-004
        EmbeddingConfig(provider="openai", model_name="text-embedding-3-small")
        EmbeddingConfig(provider="huggingface", model_name="all-MiniLM-L6-v2")
    """

    provider: str = Field(
        default="google",
        description="Embedding provider: 'google', 'openai', 'huggingface'",
    )
    model_name: str = Field(
        default="models/text-embedding-004",
        description="Embedding model identifier",
    )
    model_kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra kwargs passed to the embedding model constructor",
    )


class ChunkingConfig(BaseModel):
    """
    Passage chunking configuration.

    Used by: indexing/chunking.py

    Built-in strategies:
        "sentence_window" — greedy fixed-size windows snapped forward to
                            the last sentence break inside a small
                            lookahead. Default; keeps timestamps and
                            sentences of transcripts intact.
        "recursive"       — RecursiveCharacterTextSplitter. Splits on
                            paragraphs, then lines, then words.

    lookahead only applies to "sentence_window".
    """

    strategy: str = Field(
        default="sentence_window",
        description="Chunking strategy: 'sentence_window' or 'recursive'",
    )
    chunk_size: int = Field(
        default=2000,
        gt=0,
        description="Target passage size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive passages",
    )
    lookahead: int = Field(
        default=100,
        ge=0,
        description="Extra characters scanned past the nominal boundary for a sentence break",
    )

    @model_validator(mode="after")
    def validate_overlap(self) -> "ChunkingConfig":
        """Overlap must be smaller than chunk size, otherwise chunks would never advance."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        return self


class RetrieverConfig(BaseModel):
    """
    Hybrid retrieval configuration.

    Used by: retrieval/search.py

    Both legs fetch generous pools so the ranker, not a threshold,
    decides what reaches the prompt. min_similarity of 0.0 is
    effectively no floor.
    """

    vector_fetch_k: int = Field(
        default=100,
        gt=0,
        description="Candidate cap for the vector leg",
    )
    keyword_fetch_k: int = Field(
        default=50,
        gt=0,
        description="Candidate cap for the keyword leg",
    )
    max_keywords: int = Field(
        default=5,
        gt=0,
        description="Maximum number of query tokens used by the keyword leg",
    )
    min_similarity: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="Similarity floor for the vector leg",
    )


class RankerConfig(BaseModel):
    """
    Score fusion configuration.

    Used by: retrieval/reranking.py

    title_boost sits an order of magnitude above the [0, 1] similarity
    scale so an exact title match always outranks embedding noise.
    """

    top_k: int = Field(
        default=25,
        gt=0,
        description="Number of candidates kept after fusion",
    )
    keyword_only_score: float = Field(
        default=0.5,
        description="Base score for candidates found only by the keyword leg",
    )
    title_boost: float = Field(
        default=10.0,
        ge=0.0,
        description="Added when the source title contains the full query",
    )


class WebSearchConfig(BaseModel):
    """
    Web-grounded search configuration.

    Used by: generation/web.py

    tool is bound to the chat model as-is. The default is Gemini's
    google_search grounding tool.
    """

    tool: dict[str, Any] = Field(
        default_factory=lambda: {"google_search": {}},
        description="Tool spec bound to the chat model for grounded search",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for the web search call",
    )


class DocumentStoreConfig(BaseModel):
    """
    Document store configuration.

    Used by: stores/

    Supabase credentials default to SUPABASE_URL / SUPABASE_ANON_KEY.
    The memory backend ignores everything but backend.
    """

    backend: StoreBackend = Field(
        default=StoreBackend.MEMORY,
        description="Document store backend",
    )
    supabase_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("SUPABASE_URL"),
        description="Supabase project URL",
    )
    supabase_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("SUPABASE_ANON_KEY"),
        description="Supabase API key",
    )
    documents_table: str = Field(default="documents")
    sources_table: str = Field(default="sources")
    settings_table: str = Field(default="settings")
    match_function: str = Field(
        default="match_documents",
        description="Postgres function performing the vector similarity search",
    )


# ---------------------------------------------------------------------------
# Top-level config bundling everything
# ---------------------------------------------------------------------------

class ToolkitConfig(BaseModel):
    """
    Complete configuration.

    Techniques receive this and pass slices to each stage:
        chunker = get_chunker(config.chunking)
        retriever = HybridRetriever(store, config.retriever)
        ranker = FusionRanker(config.ranker)

    All sub-configs have defaults, so ToolkitConfig() with no arguments
    gives a working in-memory setup.
    """

    llm: LLMConfig = Field(default_factory=LLMConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retriever: RetrieverConfig = Field(default_factory=RetrieverConfig)
    ranker: RankerConfig = Field(default_factory=RankerConfig)
    web_search: WebSearchConfig = Field(default_factory=WebSearchConfig)
    store: DocumentStoreConfig = Field(default_factory=DocumentStoreConfig)

    technique: Technique = Field(
        default=Technique.HYBRID,
        description="Answering strategy",
    )
    embed_concurrency: int = Field(
        default=4,
        gt=0,
        description="Parallel embedding calls during ingestion",
    )
    debug_snippet_chars: int = Field(
        default=300,
        gt=0,
        description="Passage text length kept in debug snippets",
    )
    full_context_limit: int = Field(
        default=10000,
        gt=0,
        description="Maximum passages loaded by the full-context technique",
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level name",
    )
