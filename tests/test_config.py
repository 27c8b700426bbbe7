"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from hybrid_rag.config import (
    ChunkingConfig,
    DocumentStoreConfig,
    LLMConfig,
    LLMProvider,
    StoreBackend,
    Technique,
    ToolkitConfig,
)


class TestDefaults:

    def test_toolkit_defaults(self):
        config = ToolkitConfig()
        assert config.llm.provider == LLMProvider.GOOGLE
        assert config.technique == Technique.HYBRID
        assert config.store.backend == StoreBackend.MEMORY
        assert config.embed_concurrency == 4

    def test_chunking_defaults(self):
        config = ChunkingConfig()
        assert (config.chunk_size, config.chunk_overlap, config.lookahead) == (2000, 200, 100)
        assert config.strategy == "sentence_window"

    def test_retrieval_and_ranking_defaults(self):
        config = ToolkitConfig()
        assert config.retriever.vector_fetch_k == 100
        assert config.retriever.keyword_fetch_k == 50
        assert config.retriever.max_keywords == 5
        assert config.retriever.min_similarity == 0.0
        assert config.ranker.top_k == 25
        assert config.ranker.keyword_only_score == 0.5
        assert config.ranker.title_boost == 10.0

    def test_web_search_tool_default(self):
        assert ToolkitConfig().web_search.tool == {"google_search": {}}


class TestValidation:

    def test_overlap_must_be_smaller_than_size(self):
        with pytest.raises(ValueError, match="chunk_overlap"):
            ChunkingConfig(chunk_size=100, chunk_overlap=100)

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            LLMConfig(provider="not-a-provider")

    def test_provider_from_string(self):
        assert LLMConfig(provider="anthropic").provider == LLMProvider.ANTHROPIC

    def test_technique_from_string(self):
        assert ToolkitConfig(technique="full_context").technique == Technique.FULL_CONTEXT

    def test_negative_temperature_rejected(self):
        with pytest.raises(ValidationError):
            LLMConfig(temperature=-0.1)


class TestEnvironment:

    def test_supabase_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        config = DocumentStoreConfig()
        assert config.supabase_url == "https://project.supabase.co"
        assert config.supabase_key == "anon-key"

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert ToolkitConfig().log_level == "DEBUG"

    def test_explicit_values_win_over_env(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://from-env.supabase.co")
        config = DocumentStoreConfig(supabase_url="https://explicit.supabase.co")
        assert config.supabase_url == "https://explicit.supabase.co"
