from .hybrid import build_hybrid_graph, build_retrieval_graph
from .state import AnswerState, RetrievalState

__all__ = ["build_hybrid_graph", "build_retrieval_graph", "AnswerState", "RetrievalState"]
