"""Tests for query keyword extraction."""

from hybrid_rag.retrieval.keywords import extract_keywords


class TestExtractKeywords:

    def test_korean_query(self):
        assert extract_keywords("세부 호핑투어") == ["세부", "호핑투어"]

    def test_punctuation_and_case(self):
        assert extract_keywords("What's the PRICE, in Cebu?") == ["what", "the", "price", "in", "cebu"]

    def test_single_characters_dropped(self):
        assert extract_keywords("a b c tour") == ["tour"]

    def test_duplicates_removed_in_order(self):
        assert extract_keywords("tour Tour TOUR boat") == ["tour", "boat"]

    def test_capped(self):
        assert extract_keywords("one two three four five six seven", max_keywords=3) == [
            "one", "two", "three",
        ]

    def test_no_usable_tokens(self):
        assert extract_keywords("?? ! a") == []
