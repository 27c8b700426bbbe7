"""
Query keyword extraction for the keyword leg.

Turns a free-text question into a short list of search tokens:
    "세부 호핑투어, 가격은?"  →  ["세부", "호핑투어", "가격은"]

Punctuation becomes whitespace, tokens are lower-cased, single
characters are dropped (they match almost everything), duplicates are
removed keeping first-seen order, and the list is capped.
"""

import re

_PUNCTUATION = re.compile(r"[^\w\s]", re.UNICODE)


def extract_keywords(query: str, max_keywords: int = 5) -> list[str]:
    """
    Extract up to max_keywords search tokens from query.

    Args:
        query: The user's question.
        max_keywords: Cap on the number of tokens returned.

    Returns:
        Lower-cased, de-duplicated tokens longer than one character.
        Empty if the query has none.
    """
    cleaned = _PUNCTUATION.sub(" ", query).lower()

    keywords: list[str] = []
    for token in cleaned.split():
        if len(token) <= 1 or token in keywords:
            continue
        keywords.append(token)
        if len(keywords) >= max_keywords:
            break
    return keywords
