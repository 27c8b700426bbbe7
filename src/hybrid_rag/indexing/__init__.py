from .chunking import RecursiveChunker, SentenceWindowChunker, get_chunker
from .embeddings import EmbeddingAdapter, get_embedding_model
from .ingestion import IngestionPipeline

__all__ = [
    "RecursiveChunker",
    "SentenceWindowChunker",
    "get_chunker",
    "EmbeddingAdapter",
    "get_embedding_model",
    "IngestionPipeline",
]
