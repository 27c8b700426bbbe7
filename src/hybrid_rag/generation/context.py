"""
Context and citation assembly.

Turns ranked candidates into the numbered context block the model reads
and the citation list the user sees. Citation numbers are per source,
not per passage: three passages from the same article all carry [[1]].

    [[1]]
    Title: Cebu Hopping Tour
    Date: 2024-01-01
    URL: https://blog.example.com/cebu
    Type: ARTICLE
    Content: ...

Sources are numbered in the order they first appear in the ranked list,
so [[1]] is always the source of the best passage.

Usage:
    from hybrid_rag.generation.context import ContextAssembler

    context = ContextAssembler().assemble(ranked.candidates)
    context.context_block   # goes into the prompt
    context.citations       # goes into ChatResponse.sources
"""

from hybrid_rag.models.document import RetrievalCandidate
from hybrid_rag.models.result import AssembledContext, Citation
from hybrid_rag.utils.helpers import timed_url

# Stands in for the context when nothing was retrieved. The answer prompt
# tells the model to say it has no internal data when it sees this.
NO_INTERNAL_DATA_MARKER = "[NO MATCHING INTERNAL DATA]"


def citation_marker(index: int) -> str:
    """The inline citation token the model is told to use: 1 → '[[1]]'."""
    return f"[[{index}]]"


class ContextAssembler:
    """Builds an AssembledContext from ranked candidates."""

    def _block(self, index: int, candidate: RetrievalCandidate) -> str:
        source = candidate.source
        lines = [
            citation_marker(index),
            f"Title: {source.title}",
            f"Date: {source.date.isoformat() if source.date else 'unknown'}",
            f"URL: {source.url or 'none'}",
            f"Type: {source.type.value}",
        ]
        if candidate.passage.start_time:
            lines.append(f"Start: {candidate.passage.start_time}")
            if source.url:
                lines.append(f"Link: {timed_url(source.url, candidate.passage.start_time)}")
        lines.append(f"Content: {candidate.passage.text}")
        return "\n".join(lines)

    def assemble(self, candidates: list[RetrievalCandidate]) -> AssembledContext:
        if not candidates:
            return AssembledContext(
                context_block=NO_INTERNAL_DATA_MARKER,
                citations=[],
                is_empty=True,
            )

        indices: dict[str, int] = {}
        citations: list[Citation] = []
        blocks: list[str] = []

        for candidate in candidates:
            source_id = candidate.source.id
            if source_id not in indices:
                indices[source_id] = len(indices) + 1
                citations.append(Citation(index=indices[source_id], source=candidate.source))
            blocks.append(self._block(indices[source_id], candidate))

        return AssembledContext(
            context_block="\n\n".join(blocks),
            citations=citations,
            is_empty=False,
        )
