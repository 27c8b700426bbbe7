"""Tests for result models and the camelCase chat contract."""

import pytest
from pydantic import ValidationError

from hybrid_rag.models.document import Source
from hybrid_rag.models.result import (
    ChatRequest,
    ChatResponse,
    Citation,
    DebugSnippet,
    SourceReference,
    WebSource,
)


class TestChatRequest:

    def test_accepts_camel_case(self):
        request = ChatRequest.model_validate({
            "query": "세부 호핑투어",
            "systemInstruction": "Be brief.",
            "useWebSearch": True,
        })
        assert request.query == "세부 호핑투어"
        assert request.system_instruction == "Be brief."
        assert request.use_web_search is True

    def test_accepts_field_names(self):
        request = ChatRequest(query="q", use_web_search=True)
        assert request.use_web_search is True

    def test_empty_query_rejected(self):
        with pytest.raises(ValidationError):
            ChatRequest(query="")


class TestChatResponse:

    def test_serializes_with_camel_case(self, cebu_source):
        response = ChatResponse(
            answer="Hi [[1]]",
            sources=[SourceReference.from_citation(Citation(index=1, source=cebu_source))],
            web_sources=[WebSource(title="W", url="https://w.example")],
            debug_snippets=[DebugSnippet(score=0.9, text="t", source_title="Cebu Hopping Tour")],
        )
        data = response.model_dump(by_alias=True)

        assert set(data) == {"answer", "sources", "webSources", "debugSnippets"}
        assert data["debugSnippets"][0]["sourceTitle"] == "Cebu Hopping Tour"
        assert data["sources"][0]["index"] == 1

    def test_defaults_are_empty(self):
        response = ChatResponse(answer="x")
        assert response.sources == []
        assert response.web_sources == []
        assert response.debug_snippets == []


class TestSourceReference:

    def test_from_citation(self, cebu_source):
        ref = SourceReference.from_citation(Citation(index=2, source=cebu_source))
        assert ref.index == 2
        assert ref.title == "Cebu Hopping Tour"
        assert ref.date == "2024-01-01"
        assert ref.url == "https://blog.example.com/cebu-hopping"

    def test_missing_url_and_date_become_empty_strings(self):
        ref = SourceReference.from_citation(Citation(index=1, source=Source(id="s", title="T")))
        assert ref.url == ""
        assert ref.date == ""


class TestCitation:

    def test_index_is_one_based(self, cebu_source):
        with pytest.raises(ValidationError):
            Citation(index=0, source=cebu_source)
