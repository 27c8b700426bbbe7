"""
Supabase (Postgres + pgvector) document store.

Expected schema:

    create table sources (
        id text primary key,
        type text not null,
        title text not null,
        url text,
        date date,
        chunk_count int not null default 0
    );

    create table documents (
        id text primary key,
        source_id text not null references sources(id) on delete cascade,
        chunk_index int not null,
        content text not null,
        embedding vector(768),
        start_time text,
        metadata jsonb not null
    );

    create table settings (key text primary key, value text not null);

plus a match_documents(query_embedding, match_threshold, match_count)
function returning (id, content, metadata, similarity) ordered by
cosine similarity. Each documents.metadata row carries the source
fields (sourceId, title, url, date, type, chunkIndex, startTime) so a
search hit is self-describing.

Keyword tokens go into a PostgREST `or` filter. They are reduced to
word characters first, so a token can never add filter syntax.
"""

import logging
import re
from typing import Any, Optional

from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.config import DocumentStoreConfig
from hybrid_rag.models.document import Passage, RetrievalCandidate, Source

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w]", re.UNICODE)


def sanitize_token(token: str) -> str:
    """Strip everything but letters, digits and underscores."""
    return _NON_WORD.sub("", token)


class SupabaseDocumentStore(BaseDocumentStore):
    """
    Store backed by a Supabase project.

    Takes an already-built supabase Client so tests (and callers with
    their own connection handling) can inject one. Use from_config() to
    build it from SUPABASE_URL / SUPABASE_ANON_KEY.
    """

    def __init__(self, client: Any, config: DocumentStoreConfig = None):
        self._client = client
        self._config = config or DocumentStoreConfig()

    @classmethod
    def from_config(cls, config: DocumentStoreConfig) -> "SupabaseDocumentStore":
        if not config.supabase_url or not config.supabase_key:
            raise ValueError(
                "Supabase store requires supabase_url and supabase_key "
                "(or SUPABASE_URL / SUPABASE_ANON_KEY in the environment)."
            )

        from supabase import create_client

        return cls(create_client(config.supabase_url, config.supabase_key), config)

    # --- row mapping ---

    @staticmethod
    def _metadata(source: Source, passage: Passage) -> dict:
        return {
            "sourceId": source.id,
            "title": source.title,
            "url": source.url,
            "date": source.date.isoformat() if source.date else None,
            "type": source.type.value,
            "chunkIndex": passage.chunk_index,
            "startTime": passage.start_time,
        }

    @staticmethod
    def _candidate(row: dict, rank: int, **scores) -> RetrievalCandidate:
        meta = row.get("metadata") or {}
        source_id = meta.get("sourceId") or row.get("source_id", "")
        source = Source(
            id=source_id,
            type=meta.get("type") or "ARTICLE",
            title=meta.get("title") or "Untitled",
            url=meta.get("url"),
            date=meta.get("date") or None,
        )
        passage = Passage(
            id=str(row["id"]),
            parent_source_id=source_id,
            chunk_index=meta.get("chunkIndex") or 0,
            text=row["content"],
            start_time=meta.get("startTime"),
        )
        return RetrievalCandidate(passage=passage, source=source, rank=rank, **scores)

    # --- write path ---

    def add_source(self, source: Source, passages: list[Passage]) -> int:
        cfg = self._config
        stored = source.model_copy(update={"chunk_count": len(passages)})
        self._client.table(cfg.sources_table).upsert({
            "id": stored.id,
            "type": stored.type.value,
            "title": stored.title,
            "url": stored.url,
            "date": stored.date.isoformat() if stored.date else None,
            "chunk_count": stored.chunk_count,
        }).execute()

        if not passages:
            return 0

        rows = [
            {
                "id": p.id,
                "source_id": source.id,
                "chunk_index": p.chunk_index,
                "content": p.text,
                "embedding": p.embedding,
                "start_time": p.start_time,
                "metadata": self._metadata(stored, p),
            }
            for p in passages
        ]
        try:
            self._client.table(cfg.documents_table).insert(rows).execute()
        except Exception:
            # one insert is one statement, so only the source row is left over
            logger.warning("Passage insert failed for source %s, removing source row", source.id)
            self._client.table(cfg.sources_table).delete().eq("id", source.id).execute()
            raise
        logger.info("Stored %d passages for source %s", len(rows), source.id)
        return len(rows)

    def delete_source(self, source_id: str) -> int:
        cfg = self._config
        removed = (
            self._client.table(cfg.documents_table)
            .delete()
            .eq("source_id", source_id)
            .execute()
        )
        self._client.table(cfg.sources_table).delete().eq("id", source_id).execute()
        return len(removed.data or [])

    # --- read path ---

    def vector_search(
        self,
        embedding: list[float],
        k: int,
        min_similarity: float = 0.0,
    ) -> list[RetrievalCandidate]:
        response = self._client.rpc(self._config.match_function, {
            "query_embedding": embedding,
            "match_threshold": min_similarity,
            "match_count": k,
        }).execute()
        return [
            self._candidate(row, rank, vector_score=float(row.get("similarity", 0.0)))
            for rank, row in enumerate(response.data or [])
        ]

    def text_search(self, keywords: list[str], k: int) -> list[RetrievalCandidate]:
        tokens = [t for t in (sanitize_token(kw) for kw in keywords) if t]
        if not tokens:
            return []

        conditions = []
        for token in tokens:
            conditions.append(f"content.ilike.*{token}*")
            conditions.append(f"metadata->>title.ilike.*{token}*")

        response = (
            self._client.table(self._config.documents_table)
            .select("id, content, metadata")
            .or_(",".join(conditions))
            .limit(k)
            .execute()
        )
        return [
            self._candidate(row, rank, keyword_hit=True)
            for rank, row in enumerate(response.data or [])
        ]

    def list_sources(self) -> list[Source]:
        response = (
            self._client.table(self._config.sources_table)
            .select("*")
            .order("date", desc=True, nullsfirst=False)
            .execute()
        )
        return [Source(**row) for row in response.data or []]

    def get_source(self, source_id: str) -> Optional[Source]:
        response = (
            self._client.table(self._config.sources_table)
            .select("*")
            .eq("id", source_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return Source(**rows[0]) if rows else None

    def list_passages(self, limit: int) -> list[RetrievalCandidate]:
        response = (
            self._client.table(self._config.documents_table)
            .select("id, content, metadata")
            .limit(limit)
            .execute()
        )
        return [self._candidate(row, rank) for rank, row in enumerate(response.data or [])]

    # --- settings ---

    def get_setting(self, key: str) -> Optional[str]:
        response = (
            self._client.table(self._config.settings_table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0]["value"] if rows else None

    def set_setting(self, key: str, value: str) -> None:
        self._client.table(self._config.settings_table).upsert(
            {"key": key, "value": value}
        ).execute()

    def delete_setting(self, key: str) -> None:
        self._client.table(self._config.settings_table).delete().eq("key", key).execute()
