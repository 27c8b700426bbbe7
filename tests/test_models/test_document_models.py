"""Tests for document models — validation at the ingestion boundary."""

import datetime as dt

import pytest
from pydantic import ValidationError

from hybrid_rag.models.document import Passage, Source, SourceDocument, SourceType


class TestSourceDocument:

    @pytest.mark.parametrize("raw, expected", [
        ("youtube", SourceType.VIDEO),
        ("VIDEO", SourceType.VIDEO),
        ("Blog", SourceType.ARTICLE),
        ("post", SourceType.ARTICLE),
        ("article", SourceType.ARTICLE),
    ])
    def test_type_aliases(self, raw, expected):
        doc = SourceDocument(title="t", content="c", type=raw)
        assert doc.type == expected

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            SourceDocument(title="t", content="c", type="podcast")

    @pytest.mark.parametrize("url", ["", "#", "  #  "])
    def test_placeholder_url_becomes_none(self, url):
        assert SourceDocument(title="t", content="c", url=url).url is None

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            SourceDocument(title="   ", content="c")

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError):
            SourceDocument(title="t", content="\n\n")

    def test_date_parsing(self):
        assert SourceDocument(title="t", content="c", date="2024-01-01").date == dt.date(2024, 1, 1)
        assert SourceDocument(title="t", content="c", date="").date is None

    def test_malformed_date_rejected(self):
        with pytest.raises(ValidationError):
            SourceDocument(title="t", content="c", date="last tuesday")

    def test_title_is_stripped(self):
        assert SourceDocument(title="  Cebu  ", content="c").title == "Cebu"


class TestSource:

    def test_defaults(self):
        source = Source(id="s1", title="Cebu")
        assert source.type == SourceType.ARTICLE
        assert source.url is None
        assert source.chunk_count == 0

    def test_url_placeholder(self):
        assert Source(id="s1", title="Cebu", url="#").url is None


class TestPassage:

    def test_is_frozen(self):
        passage = Passage(id="s1:0", parent_source_id="s1", text="hello")
        with pytest.raises(ValidationError):
            passage.text = "changed"

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Passage(id="s1:0", parent_source_id="s1", text="")

    def test_embedding_optional(self):
        assert Passage(id="s1:0", parent_source_id="s1", text="x").embedding is None
