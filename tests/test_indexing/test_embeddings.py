"""Tests for the embedding adapter and factory — backends are mocked."""

from unittest.mock import MagicMock, patch

import pytest

from hybrid_rag.config import EmbeddingConfig
from hybrid_rag.indexing.embeddings import EmbeddingAdapter, get_embedding_model


class TestEmbeddingAdapter:

    def test_newlines_collapsed_before_call(self):
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]
        adapter = EmbeddingAdapter(embeddings)

        assert adapter.embed("first line\nsecond line") == [0.1, 0.2]
        embeddings.embed_query.assert_called_once_with("first line second line")

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_text_skips_backend(self, text):
        embeddings = MagicMock()
        adapter = EmbeddingAdapter(embeddings)

        assert adapter.embed(text) is None
        embeddings.embed_query.assert_not_called()

    def test_backend_error_becomes_none(self, failing_embeddings):
        adapter = EmbeddingAdapter(failing_embeddings)
        assert adapter.embed("세부 호핑투어") is None

    def test_empty_vector_becomes_none(self):
        embeddings = MagicMock()
        embeddings.embed_query.return_value = []
        assert EmbeddingAdapter(embeddings).embed("text") is None

    def test_works_with_langchain_embeddings(self, fake_embeddings):
        vector = EmbeddingAdapter(fake_embeddings).embed("hello")
        assert len(vector) == 16
        assert all(isinstance(v, float) for v in vector)

    def test_embed_many_preserves_order_and_isolates_failures(self):
        def embed_query(text):
            if text == "bad":
                raise RuntimeError("rate limited")
            return [float(len(text))]

        embeddings = MagicMock()
        embeddings.embed_query.side_effect = embed_query
        adapter = EmbeddingAdapter(embeddings)

        vectors = adapter.embed_many(["a", "bad", "ccc", ""], max_workers=3)
        assert vectors == [[1.0], None, [3.0], None]

    def test_embed_many_empty(self):
        assert EmbeddingAdapter(MagicMock()).embed_many([]) == []


class TestGetEmbeddingModel:

    @patch("langchain_google_genai.GoogleGenerativeAIEmbeddings")
    def test_google(self, mock_cls):
        get_embedding_model(EmbeddingConfig())
        mock_cls.assert_called_once_with(model="models/text-embedding-004")

    @patch("langchain_openai.OpenAIEmbeddings")
    def test_openai(self, mock_cls):
        get_embedding_model(EmbeddingConfig(provider="openai", model_name="text-embedding-3-small"))
        mock_cls.assert_called_once_with(model="text-embedding-3-small")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown embedding provider"):
            get_embedding_model(EmbeddingConfig(provider="cohere"))
