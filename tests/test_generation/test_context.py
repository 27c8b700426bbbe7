"""Tests for context and citation assembly."""

from hybrid_rag.generation.context import NO_INTERNAL_DATA_MARKER, ContextAssembler
from hybrid_rag.models.document import Passage, RetrievalCandidate, Source, SourceType


class TestContextAssembler:

    def test_empty_candidates_use_marker(self):
        context = ContextAssembler().assemble([])

        assert context.context_block == NO_INTERNAL_DATA_MARKER
        assert context.citations == []
        assert context.is_empty is True

    def test_citations_numbered_per_source_first_seen(self, make_candidate):
        a, b, c = (Source(id=x, title=x.upper()) for x in "abc")
        candidates = [
            make_candidate(a, 0),
            make_candidate(b, 0),
            make_candidate(a, 1),
            make_candidate(c, 0),
        ]

        context = ContextAssembler().assemble(candidates)

        assert [(cit.index, cit.source.id) for cit in context.citations] == [(1, "a"), (2, "b"), (3, "c")]
        assert context.context_block.count("[[1]]") == 2
        assert context.context_block.count("[[2]]") == 1
        assert context.context_block.count("[[3]]") == 1
        assert context.is_empty is False

    def test_block_order_follows_candidates(self, make_candidate, cebu_source, bohol_source):
        context = ContextAssembler().assemble([
            make_candidate(bohol_source, 0, text="Chocolate Hills."),
            make_candidate(cebu_source, 0, text="Island hopping."),
        ])
        block = context.context_block
        assert block.index("Chocolate Hills.") < block.index("Island hopping.")
        assert block.startswith("[[1]]\nTitle: Bohol Day Trip")

    def test_block_fields(self, make_candidate, cebu_source):
        block = ContextAssembler().assemble([make_candidate(cebu_source, 0, text="Boats at 8.")]).context_block

        assert "Title: Cebu Hopping Tour" in block
        assert "Date: 2024-01-01" in block
        assert "URL: https://blog.example.com/cebu-hopping" in block
        assert "Type: ARTICLE" in block
        assert "Content: Boats at 8." in block
        assert "Start:" not in block

    def test_start_time_and_missing_metadata(self):
        source = Source(id="v", title="Bohol vlog", type=SourceType.VIDEO)
        passage = Passage(id="v:0", parent_source_id="v", text="02:30 Hills.", start_time="02:30")
        block = ContextAssembler().assemble([RetrievalCandidate(passage=passage, source=source)]).context_block

        assert "Start: 02:30" in block
        assert "Date: unknown" in block
        assert "URL: none" in block
        assert "Link:" not in block

    def test_video_link_opens_at_start_time(self):
        source = Source(id="v", title="Bohol vlog", type=SourceType.VIDEO, url="https://youtu.be/abc")
        passage = Passage(id="v:0", parent_source_id="v", text="02:30 Hills.", start_time="02:30")
        block = ContextAssembler().assemble([RetrievalCandidate(passage=passage, source=source)]).context_block

        assert "Link: https://youtu.be/abc?t=150" in block

    def test_same_title_different_ids_are_distinct_sources(self, make_candidate):
        one = Source(id="one", title="Cebu", url=None)
        two = Source(id="two", title="Cebu", url=None)

        context = ContextAssembler().assemble([make_candidate(one), make_candidate(two)])

        assert len(context.citations) == 2
