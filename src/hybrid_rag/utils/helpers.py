"""
Shared utility functions.

Helpers used across the package — LLM factory, message text extraction,
text normalisation and logging setup.
"""

import logging
import re
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from hybrid_rag.config import LLMConfig, LLMProvider

_TIMESTAMP = re.compile(r"(?<!\d)(?:(\d{1,2}):)?([0-5]?\d):([0-5]\d)(?!\d)")


def get_llm(config: LLMConfig) -> BaseChatModel:
    """
    Factory that returns a LangChain chat model based on config.

    Lazy imports so you only need the package for the provider you
    actually use. timeout and max_retries are set on the client, which
    is where retries for transient failures live.

    Used by:
        - generation/generate.py (final answers)
        - generation/web.py (web-grounded search)

    Args:
        config: LLMConfig with provider, model_name, temperature, max_tokens.

    Returns:
        A LangChain BaseChatModel instance.
    """
    if config.provider == LLMProvider.GOOGLE:
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=config.model_name,
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    elif config.provider == LLMProvider.OPENAI:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    elif config.provider == LLMProvider.ANTHROPIC:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    else:
        raise ValueError(
            f"Unknown LLM provider: '{config.provider}'. "
            f"Supported: 'google', 'openai', 'anthropic'."
        )


def model_label(config: LLMConfig) -> str:
    """'provider/model' string recorded on GenerationResult."""
    return f"{config.provider.value}/{config.model_name}"


def message_text(response) -> str:
    """
    Extract plain text from a chat model response.

    Most providers return a string in .content, but Gemini and
    Anthropic can return a list of content blocks.
    """
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)


def collapse_newlines(text: str) -> str:
    """Replace line breaks with spaces. Embedding models are sensitive to raw formatting."""
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def find_timestamp(text: str) -> Optional[str]:
    """
    Return the first 'mm:ss' or 'h:mm:ss' marker in text, if any.

    Video transcripts pasted with their timing lines carry these markers;
    the first one in a passage is where that passage starts.
    """
    match = _TIMESTAMP.search(text)
    return match.group(0) if match else None


def timestamp_to_seconds(stamp: str) -> int:
    """'02:30' → 150, '1:02:30' → 3750."""
    seconds = 0
    for part in stamp.split(":"):
        seconds = seconds * 60 + int(part)
    return seconds


def timed_url(url: str, stamp: str) -> str:
    """Append a t=<seconds> query parameter so the link opens at stamp."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}t={timestamp_to_seconds(stamp)}"


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "…"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for scripts and examples.

    Pass ToolkitConfig.log_level. basicConfig is a no-op when the host
    already installed handlers, so the package logger level is set too.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("hybrid_rag").setLevel(numeric)
