"""
Web-grounded search through the chat model.

There is no separate search API: the chat model is called once with a
grounding tool bound (Gemini's google_search by default) and reports the
pages it used in its response metadata:

    response.response_metadata["grounding_metadata"]["grounding_chunks"]
        → [{"web": {"uri": "...", "title": "..."}}, ...]

The searcher is best effort. A missing tool binding, a timeout or any
backend error gives an empty WebSearchResult with ok=False, and the
answer is produced from internal data alone.

Usage:
    from hybrid_rag.generation.web import WebSearcher

    searcher = WebSearcher(llm, WebSearchConfig())
    result = searcher.search("세부 호핑투어 가격")
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from langchain_core.language_models.chat_models import BaseChatModel

from hybrid_rag.config import WebSearchConfig
from hybrid_rag.generation.prompts import WEB_SEARCH_PROMPT
from hybrid_rag.models.result import WebSearchResult, WebSource
from hybrid_rag.utils.helpers import message_text

logger = logging.getLogger(__name__)


def extract_web_sources(response) -> list[WebSource]:
    """Grounding chunks of a chat response as WebSources, deduplicated by url."""
    metadata = getattr(response, "response_metadata", None) or {}
    grounding = metadata.get("grounding_metadata") or {}
    chunks = grounding.get("grounding_chunks") or []

    sources: list[WebSource] = []
    seen: set[str] = set()
    for chunk in chunks:
        web = (chunk or {}).get("web") or {}
        url = web.get("uri")
        if not url or url in seen:
            continue
        seen.add(url)
        sources.append(WebSource(title=web.get("title") or url, url=url))
    return sources


class WebSearcher:
    """Runs one grounded lookup per query."""

    def __init__(self, llm: BaseChatModel, config: WebSearchConfig = None):
        self._llm = llm
        self._config = config or WebSearchConfig()

    def _call(self, query: str):
        bound = self._llm.bind_tools([self._config.tool])
        return bound.invoke(WEB_SEARCH_PROMPT.format(query=query))

    def search(self, query: str) -> WebSearchResult:
        pool = ThreadPoolExecutor(max_workers=1)
        try:
            response = pool.submit(self._call, query).result(timeout=self._config.timeout)
        except Exception as e:
            logger.warning("Web search failed: %s", e)
            return WebSearchResult(ok=False)
        finally:
            # Do not wait on a call that timed out
            pool.shutdown(wait=False)

        sources = extract_web_sources(response)
        logger.info("Web search returned %d sources", len(sources))
        return WebSearchResult(text=message_text(response).strip(), sources=sources)
