"""
Grounded answer generation.

Composes the final prompt from the system instruction, the assembled
internal context and the web findings, and calls the chat model once.

Two entry points:
    - generate(): raises whatever the backend raises.
    - generate_or_apologize(): the one the techniques use. A failed call
      becomes APOLOGY_MESSAGE with failed=True; the raw error only goes
      to the log.

Usage:
    from hybrid_rag.generation.generate import GroundedGenerator

    generator = GroundedGenerator(llm, model_name="google/gemini-2.5-flash")
    result = generator.generate_or_apologize(query, context, system_instruction)
"""

import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompts import PromptTemplate

from hybrid_rag.generation.context import NO_INTERNAL_DATA_MARKER
from hybrid_rag.generation.prompts import (
    ANSWER_PROMPT,
    APOLOGY_MESSAGE,
    DEFAULT_SYSTEM_PROMPT,
)
from hybrid_rag.models.result import AssembledContext, GenerationResult, WebSearchResult
from hybrid_rag.utils.helpers import message_text

logger = logging.getLogger(__name__)

WEB_DISABLED_NOTE = "The user did not request web search. Skip the cross-check section."
WEB_EMPTY_NOTE = "Web search returned nothing usable. Skip the cross-check section."


def web_section(web: Optional[WebSearchResult], requested: bool) -> tuple[str, str]:
    """(status, findings) for the prompt's web section."""
    if not requested:
        return "Disabled", WEB_DISABLED_NOTE
    if web is None or not web.ok or not web.text:
        return "Unavailable", WEB_EMPTY_NOTE
    return "Active", web.text


class GroundedGenerator:
    """
    Final answer generator.

    The prompt template is swappable so the full-context technique can
    reuse the same call and failure handling with its own wording.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        model_name: str = "",
        prompt: PromptTemplate = ANSWER_PROMPT,
    ):
        self._llm = llm
        self._model_name = model_name
        self._prompt = prompt

    def compose(
        self,
        query: str,
        context: AssembledContext,
        system_instruction: Optional[str] = None,
        web: Optional[WebSearchResult] = None,
        web_requested: bool = False,
    ) -> str:
        web_status, web_findings = web_section(web, web_requested)
        return self._prompt.format(
            system_instruction=system_instruction or DEFAULT_SYSTEM_PROMPT,
            no_data_marker=NO_INTERNAL_DATA_MARKER,
            context=context.context_block,
            web_status=web_status,
            web_findings=web_findings,
            query=query,
        )

    def generate(
        self,
        query: str,
        context: AssembledContext,
        system_instruction: Optional[str] = None,
        web: Optional[WebSearchResult] = None,
        web_requested: bool = False,
    ) -> GenerationResult:
        prompt = self.compose(query, context, system_instruction, web, web_requested)
        response = self._llm.invoke(prompt)
        answer = message_text(response).strip()
        if not answer:
            raise ValueError("Chat model returned an empty answer")
        return GenerationResult(answer=answer, model=self._model_name)

    def generate_or_apologize(
        self,
        query: str,
        context: AssembledContext,
        system_instruction: Optional[str] = None,
        web: Optional[WebSearchResult] = None,
        web_requested: bool = False,
    ) -> GenerationResult:
        try:
            return self.generate(query, context, system_instruction, web, web_requested)
        except Exception:
            logger.exception("Answer generation failed")
            return GenerationResult(
                answer=APOLOGY_MESSAGE,
                model=self._model_name,
                failed=True,
            )
