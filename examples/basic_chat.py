"""
Basic example — ingest two sources and ask questions.

This script:
    1. Builds a HybridRAG on the in-memory store (Gemini by default)
    2. Ingests a blog post and a video transcript
    3. Asks questions and prints answers, sources and debug scores

Needs GOOGLE_API_KEY in the environment or in .env.

Run:
    python examples/basic_chat.py
"""

from hybrid_rag import HybridRAG, LLMConfig, RankerConfig, ToolkitConfig
from hybrid_rag.utils.helpers import setup_logging

CEBU_POST = """
Cebu Hopping Tour guide. The island hopping tour leaves Mactan at 8 am.
A private boat for four costs about 6,000 PHP including lunch.
Snorkelling at Nalusuan and Hilutungan is the highlight of the day.
"""

BOHOL_TRANSCRIPT = """
00:15 Welcome back, today we are in Bohol.
02:30 The Chocolate Hills viewpoint opens at 8 am and the entrance is 100 PHP.
05:10 Tarsier sanctuary next, keep your voice down in there.
"""


def main():
    config = ToolkitConfig()
    setup_logging(config.log_level)

    # --- Option 1: defaults ---
    rag = HybridRAG(config=config)
    rag.ingest({
        "title": "Cebu Hopping Tour",
        "content": CEBU_POST,
        "type": "blog",
        "url": "https://blog.example.com/cebu-hopping",
        "date": "2024-01-01",
    })
    rag.ingest({
        "title": "Bohol Day Trip",
        "content": BOHOL_TRANSCRIPT,
        "type": "youtube",
        "url": "https://www.youtube.com/watch?v=example",
        "date": "2024-02-10",
    })

    questions = [
        "세부 호핑투어",
        "How much is the Chocolate Hills entrance?",
    ]

    for q in questions:
        print(f"\nQ: {q}")
        response = rag.answer(q)
        print(f"A: {response.answer}")
        for source in response.sources:
            print(f"   [[{source.index}]] {source.title} ({source.url})")
        for snippet in response.debug_snippets[:3]:
            print(f"   {snippet.score:6.3f}  {snippet.source_title}")

    # --- Option 2: custom config, web cross-check ---
    custom = HybridRAG(
        config=ToolkitConfig(
            llm=LLMConfig(model_name="gemini-2.5-flash", temperature=0.0),
            ranker=RankerConfig(top_k=10),
        ),
        store=rag.store,
    )
    response = custom.answer("Is the Cebu hopping tour price still current?", use_web_search=True)
    print(f"\nWith web search: {response.answer}")
    for web in response.web_sources:
        print(f"   {web.title}: {web.url}")


if __name__ == "__main__":
    main()
