"""
Score fusion for hybrid retrieval results.

The two retrieval legs speak different languages: the vector leg has a
cosine similarity per passage, the keyword leg only a yes/no hit.
FusionRanker folds them into one ordering:

    base   = vector_score           if the vector leg found the passage
           = keyword_only_score     otherwise (0.5 by default)
    boost  = title_boost            if the source title contains the
                                    whole query (10.0 by default)
    fused  = base + boost

The boost sits far above the similarity scale, so asking for
a post by its title always surfaces that post first. Sorting is stable:
among equal scores the vector leg's order wins, then the keyword leg's.

Usage:
    from hybrid_rag.retrieval.reranking import FusionRanker
    from hybrid_rag.config import RankerConfig

    ranker = FusionRanker(RankerConfig(top_k=25))
    ranked = ranker.rank(hybrid_result, query="세부 호핑투어")
"""

from hybrid_rag.config import RankerConfig
from hybrid_rag.models.document import RetrievalCandidate
from hybrid_rag.models.result import RetrievalResult


class FusionRanker:
    """Deduplicates, scores and truncates a hybrid RetrievalResult."""

    def __init__(self, config: RankerConfig = None):
        self._config = config or RankerConfig()

    @staticmethod
    def merge(candidates: list[RetrievalCandidate]) -> list[RetrievalCandidate]:
        """
        Collapse candidates sharing a passage id into one, first-seen order.

        A passage found by both legs keeps the vector score and is marked
        as a keyword hit.
        """
        merged: dict[str, RetrievalCandidate] = {}
        for candidate in candidates:
            key = candidate.passage.id
            existing = merged.get(key)
            if existing is None:
                merged[key] = candidate
                continue

            merged[key] = existing.model_copy(update={
                "vector_score": (
                    existing.vector_score
                    if existing.vector_score is not None
                    else candidate.vector_score
                ),
                "keyword_hit": existing.keyword_hit or candidate.keyword_hit,
            })
        return list(merged.values())

    def score(self, candidate: RetrievalCandidate, query: str) -> float:
        cfg = self._config
        base = (
            candidate.vector_score
            if candidate.vector_score is not None
            else cfg.keyword_only_score
        )
        needle = query.strip().lower()
        if needle and needle in candidate.source.title.lower():
            base += cfg.title_boost
        return base

    def rank(self, retrieval: RetrievalResult, query: str) -> RetrievalResult:
        """
        Fuse, sort and truncate the candidates of retrieval.

        Args:
            retrieval: Output of HybridRetriever (vector leg candidates first).
            query: The original question, used for the title boost.

        Returns:
            RetrievalResult with at most top_k candidates, fused_score and
            rank set, best first.
        """
        merged = self.merge(retrieval.candidates)
        scored = [
            c.model_copy(update={"fused_score": self.score(c, query)})
            for c in merged
        ]
        # sorted() is stable, so ties keep merge order
        scored = sorted(scored, key=lambda c: c.fused_score, reverse=True)

        ranked = [
            c.model_copy(update={"rank": rank})
            for rank, c in enumerate(scored[: self._config.top_k])
        ]
        return RetrievalResult(
            candidates=ranked,
            query_used=retrieval.query_used or query,
            strategy="fused",
            total_candidates=len(merged),
            failed_legs=list(retrieval.failed_legs),
        )
