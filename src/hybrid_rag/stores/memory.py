"""
In-memory document store.

Keeps sources, passages and settings in dicts. Good for tests, local
experiments and small corpora; nothing is persisted.

Vector search is a brute-force cosine scan over passages that have an
embedding. Passages stored without one (failed embedding) are skipped
by the vector leg and still found by text_search.
"""

import threading
from typing import Optional

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.models.document import Passage, RetrievalCandidate, Source


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Compute cosine similarity between two vectors. Zero vectors score 0.0."""
    if len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = sum(x * x for x in a) ** 0.5
    norm_b = sum(x * x for x in b) ** 0.5
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class InMemoryDocumentStore(BaseDocumentStore):
    """
    Dict-backed store. Writes take a lock; reads work on a snapshot, so
    queries running during an ingestion see either the old or the new
    state of a source, never a half-written one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sources: dict[str, Source] = {}
        self._passages: dict[str, Passage] = {}
        self._settings: dict[str, str] = {}

    # --- write path ---

    def add_source(self, source: Source, passages: list[Passage]) -> int:
        stored = source.model_copy(update={"chunk_count": len(passages)})
        with self._lock:
            self._sources[source.id] = stored
            for passage in passages:
                self._passages[passage.id] = passage
        return len(passages)

    def delete_source(self, source_id: str) -> int:
        with self._lock:
            self._sources.pop(source_id, None)
            doomed = [
                pid for pid, p in self._passages.items()
                if p.parent_source_id == source_id
            ]
            for pid in doomed:
                del self._passages[pid]
        return len(doomed)

    # --- read path ---

    def _snapshot(self) -> list[tuple[Passage, Source]]:
        with self._lock:
            sources = dict(self._sources)
            passages = list(self._passages.values())
        return [
            (p, sources[p.parent_source_id])
            for p in passages
            if p.parent_source_id in sources
        ]

    def vector_search(
        self,
        embedding: list[float],
        k: int,
        min_similarity: float = 0.0,
    ) -> list[RetrievalCandidate]:
        scored = []
        for passage, source in self._snapshot():
            if not passage.embedding:
                continue
            similarity = cosine_similarity(embedding, passage.embedding)
            if similarity >= min_similarity:
                scored.append((similarity, passage, source))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            RetrievalCandidate(passage=p, source=s, vector_score=sim, rank=rank)
            for rank, (sim, p, s) in enumerate(scored[:k])
        ]

    def text_search(self, keywords: list[str], k: int) -> list[RetrievalCandidate]:
        needles = [kw.lower() for kw in keywords if kw]
        if not needles:
            return []

        hits = []
        for passage, source in self._snapshot():
            haystacks = (passage.text.lower(), source.title.lower())
            if any(n in h for n in needles for h in haystacks):
                hits.append(RetrievalCandidate(
                    passage=passage, source=source, keyword_hit=True, rank=len(hits),
                ))
                if len(hits) >= k:
                    break
        return hits

    def list_sources(self) -> list[Source]:
        with self._lock:
            sources = list(self._sources.values())
        # Undated sources go last
        return sorted(
            sources,
            key=lambda s: (s.date is not None, s.date.isoformat() if s.date else ""),
            reverse=True,
        )

    def get_source(self, source_id: str) -> Optional[Source]:
        with self._lock:
            return self._sources.get(source_id)

    def list_passages(self, limit: int) -> list[RetrievalCandidate]:
        pairs = sorted(
            self._snapshot(),
            key=lambda pair: (pair[0].parent_source_id, pair[0].chunk_index),
        )
        return [
            RetrievalCandidate(passage=p, source=s, rank=rank)
            for rank, (p, s) in enumerate(pairs[:limit])
        ]

    # --- settings ---

    def get_setting(self, key: str) -> Optional[str]:
        with self._lock:
            return self._settings.get(key)

    def set_setting(self, key: str, value: str) -> None:
        with self._lock:
            self._settings[key] = value

    def delete_setting(self, key: str) -> None:
        with self._lock:
            self._settings.pop(key, None)
