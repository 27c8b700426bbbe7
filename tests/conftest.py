"""
Shared test fixtures for the hybrid-rag test suite.

Provides reusable fixtures: configs, sources and candidates, an
in-memory store, and LangChain fakes standing in for the remote
embedding and chat services.
"""

import datetime as dt
from unittest.mock import MagicMock

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import AIMessage

from hybrid_rag.config import ChunkingConfig, RetrieverConfig, ToolkitConfig
from hybrid_rag.models.document import Passage, RetrievalCandidate, Source, SourceType
from hybrid_rag.stores.memory import InMemoryDocumentStore


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def chunking_config():
    return ChunkingConfig(chunk_size=500, chunk_overlap=100, lookahead=50)


@pytest.fixture
def retriever_config():
    return RetrieverConfig()


@pytest.fixture
def toolkit_config():
    return ToolkitConfig()


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def cebu_source():
    return Source(
        id="cebu",
        type=SourceType.ARTICLE,
        title="Cebu Hopping Tour",
        url="https://blog.example.com/cebu-hopping",
        date=dt.date(2024, 1, 1),
    )


@pytest.fixture
def bohol_source():
    return Source(
        id="bohol",
        type=SourceType.VIDEO,
        title="Bohol Day Trip",
        url="https://www.youtube.com/watch?v=bohol",
        date=dt.date(2024, 2, 10),
    )


@pytest.fixture
def make_candidate():
    """
    Factory for RetrievalCandidates.

    make_candidate(source, 0, vector_score=0.9) builds passage
    "<source.id>:0" with some text.
    """

    def _make(source, chunk_index=0, text=None, vector_score=None, keyword_hit=False):
        passage = Passage(
            id=f"{source.id}:{chunk_index}",
            parent_source_id=source.id,
            chunk_index=chunk_index,
            text=text or f"Passage {chunk_index} of {source.title}.",
        )
        return RetrievalCandidate(
            passage=passage,
            source=source,
            vector_score=vector_score,
            keyword_hit=keyword_hit,
        )

    return _make


# ---------------------------------------------------------------------------
# Store and backend fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def fake_embeddings():
    """Deterministic vectors, no API calls."""
    return DeterministicFakeEmbedding(size=16)


@pytest.fixture
def failing_embeddings():
    """An embedding backend that is down."""
    embeddings = MagicMock()
    embeddings.embed_query.side_effect = RuntimeError("embedding service unavailable")
    return embeddings


@pytest.fixture
def fake_llm():
    return FakeListChatModel(responses=["Island hopping costs about 6,000 PHP [[1]]."])


@pytest.fixture
def mock_llm():
    """
    A MagicMock chat model returning a canned AIMessage.

    Lets tests inspect the exact prompt via mock_llm.invoke.call_args.
    """
    llm = MagicMock()
    llm.invoke.return_value = AIMessage(content="Island hopping costs about 6,000 PHP [[1]].")
    return llm
