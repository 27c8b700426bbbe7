from .keywords import extract_keywords
from .reranking import FusionRanker
from .search import HybridRetriever, KeywordRetriever, VectorRetriever

__all__ = [
    "extract_keywords",
    "FusionRanker",
    "HybridRetriever",
    "KeywordRetriever",
    "VectorRetriever",
]
