"""
Abstract base class for answering techniques.

The assistant has more than one way to answer a question: the hybrid
retrieval pipeline, and a full-context mode that hands the whole corpus
to the model. Each is a technique behind this interface, picked by
ToolkitConfig.technique instead of branching inside one entry point.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hybrid_rag.models.result import ChatRequest, ChatResponse


class BaseTechnique(ABC):
    """Contract for answering techniques."""

    @abstractmethod
    def answer(
        self,
        query: str,
        system_instruction: Optional[str] = None,
        use_web_search: bool = False,
    ) -> ChatResponse:
        """
        Answer a question.

        Never raises for remote failures: every path returns a
        well-formed ChatResponse, with a fallback answer if needed.
        """
        ...

    def handle(self, request: ChatRequest) -> ChatResponse:
        """Answer a ChatRequest from the presentation layer."""
        return self.answer(
            request.query,
            system_instruction=request.system_instruction,
            use_web_search=request.use_web_search,
        )
