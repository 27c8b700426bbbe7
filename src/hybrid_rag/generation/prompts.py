"""
Prompt templates and the persisted system prompt.

Three templates:
    ANSWER_PROMPT        final answer over the ranked internal context
    FULL_CONTEXT_PROMPT  final answer over the whole knowledge base
    WEB_SEARCH_PROMPT    the grounded web lookup

Both answer templates share the same fixed rules (markdown only, inline
[[n]] citations, no trailing source list) and the same web section:
"Active" with findings, or a status line telling the model to skip the
cross-check.

The administrator can replace the system prompt. It is stored in the
document store's settings table under SYSTEM_PROMPT_KEY, so it survives
restarts and is shared by every process using the same store.
"""

import logging
from typing import Optional

from langchain_core.prompts import PromptTemplate

from hybrid_rag.base.store import BaseDocumentStore

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_KEY = "system_prompt"

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly assistant for a travel blog and its video channel. "
    "Answer from the blog's own posts and transcripts first.\n\n"
    "Answer rules:\n"
    "1. Whenever you use a piece of information, cite it inline as [[1]], [[2]], ...\n"
    "2. Give section headings a fitting emoji (e.g. ## 🏝️ Heading).\n"
    "3. Use markdown: tables, lists and links where they help.\n"
    "4. Be accurate and specific.\n"
    "5. If you don't know, say so plainly."
)

APOLOGY_MESSAGE = (
    "Sorry, I couldn't generate an answer right now. Please try again in a moment."
)

_RULES = (
    "[RULES - STRICTLY ENFORCED]\n"
    "1. Use only standard Markdown. No HTML tags.\n"
    "2. Cite internal data inline with its number, e.g. [[1]]. Never invent a number.\n"
    "3. Do NOT add a 'Sources' or 'References' list at the end; the interface shows sources.\n"
    "4. Turn timestamps such as 02:30 into links to that point of the video.\n"
    "5. If the internal data says {no_data_marker}, tell the user the knowledge base "
    "has nothing on this and do not make up details."
)

_WEB_SECTION = (
    "[CONTEXT 2: Web Search (for cross-checking)]\n"
    "Status: {web_status}\n"
    "{web_findings}"
)

ANSWER_PROMPT = PromptTemplate(
    input_variables=[
        "system_instruction", "no_data_marker", "context",
        "web_status", "web_findings", "query",
    ],
    template=(
        "{system_instruction}\n\n"
        + _RULES + "\n\n"
        "[CONTEXT 1: Internal Database (authoritative)]\n"
        "Prefer these passages for specific values such as prices and times.\n"
        "{context}\n\n"
        + _WEB_SECTION + "\n\n"
        "[User Question]\n"
        "{query}\n\n"
        "If the web status is not Active, skip the cross-check section."
    ),
)

FULL_CONTEXT_PROMPT = PromptTemplate(
    input_variables=[
        "system_instruction", "no_data_marker", "context",
        "web_status", "web_findings", "query",
    ],
    template=(
        "{system_instruction}\n\n"
        + _RULES + "\n\n"
        "[CONTEXT 1: The complete knowledge base]\n"
        "Every stored passage follows. Search all of it before answering.\n"
        "{context}\n\n"
        + _WEB_SECTION + "\n\n"
        "[User Question]\n"
        "{query}"
    ),
)

WEB_SEARCH_PROMPT = PromptTemplate(
    input_variables=["query"],
    template=(
        'Search the web for the latest information on this question: "{query}"\n'
        "Summarise what you find in a few short paragraphs."
    ),
)


# ---------------------------------------------------------------------------
# Persisted system prompt
# ---------------------------------------------------------------------------

def load_system_prompt(store: BaseDocumentStore) -> str:
    """
    The administrator's system prompt, or DEFAULT_SYSTEM_PROMPT.

    A store error falls back to the default so a query never fails
    because the settings table is unreachable.
    """
    try:
        saved: Optional[str] = store.get_setting(SYSTEM_PROMPT_KEY)
    except Exception:
        logger.exception("Could not load the saved system prompt, using the default")
        return DEFAULT_SYSTEM_PROMPT
    return saved if saved and saved.strip() else DEFAULT_SYSTEM_PROMPT


def save_system_prompt(store: BaseDocumentStore, prompt: str) -> None:
    if not prompt or not prompt.strip():
        raise ValueError("System prompt must not be empty")
    store.set_setting(SYSTEM_PROMPT_KEY, prompt.strip())


def reset_system_prompt(store: BaseDocumentStore) -> str:
    """Drop the saved prompt and return the default now in effect."""
    store.delete_setting(SYSTEM_PROMPT_KEY)
    return DEFAULT_SYSTEM_PROMPT
