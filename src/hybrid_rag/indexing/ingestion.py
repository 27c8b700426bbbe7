"""
Ingestion pipeline: one submitted document in, one stored Source out.

    SourceDocument → Source (new id) → chunk → start times (VIDEO only)
                   → embed (bounded parallelism) → store.add_source

Embedding failures never abort an ingestion. A passage whose embedding
failed is stored without a vector: the vector leg cannot see it, the
keyword leg still can. The report says how many passages got a vector.

Usage:
    from hybrid_rag.indexing.ingestion import IngestionPipeline

    pipeline = IngestionPipeline(store, embedder, get_chunker(ChunkingConfig()))
    report = pipeline.ingest({
        "title": "Cebu Hopping Tour",
        "content": transcript,
        "type": "youtube",
        "url": "https://youtu.be/...",
        "date": "2024-01-01",
    })
"""

import logging
import uuid
from typing import Union

from hybrid_rag.base.indexer import BaseChunker
from hybrid_rag.base.store import BaseDocumentStore
from hybrid_rag.indexing.embeddings import EmbeddingAdapter
from hybrid_rag.models.document import Passage, Source, SourceDocument, SourceType
from hybrid_rag.models.result import IngestionReport
from hybrid_rag.utils.helpers import find_timestamp

logger = logging.getLogger(__name__)


class IngestionPipeline:
    def __init__(
        self,
        store: BaseDocumentStore,
        embedder: EmbeddingAdapter,
        chunker: BaseChunker,
        embed_concurrency: int = 4,
    ):
        self._store = store
        self._embedder = embedder
        self._chunker = chunker
        self._embed_concurrency = embed_concurrency

    def ingest(self, document: Union[SourceDocument, dict]) -> IngestionReport:
        """
        Validate, chunk, embed and store one document.

        Args:
            document: A SourceDocument, or a dict validated into one.

        Returns:
            IngestionReport for the stored source.

        Raises:
            pydantic.ValidationError: If a dict does not validate.
            ValueError: If chunking produced no passages.
        """
        if not isinstance(document, SourceDocument):
            document = SourceDocument.model_validate(document)

        source = Source(
            id=uuid.uuid4().hex,
            type=document.type,
            title=document.title,
            url=document.url,
            date=document.date,
        )

        passages = self._chunker.chunk(document.content, parent_source_id=source.id)
        if not passages:
            raise ValueError(f"No passages produced for '{document.title}'")

        vectors = self._embedder.embed_many(
            [p.text for p in passages],
            max_workers=self._embed_concurrency,
        )

        is_video = source.type == SourceType.VIDEO
        prepared: list[Passage] = []
        for passage, vector in zip(passages, vectors):
            update = {"embedding": vector}
            if is_video:
                update["start_time"] = find_timestamp(passage.text)
            prepared.append(passage.model_copy(update=update))

        embedded = sum(1 for v in vectors if v is not None)
        failures = len(prepared) - embedded
        if failures:
            logger.warning(
                "%d of %d passages of '%s' were stored without an embedding",
                failures, len(prepared), source.title,
            )

        self._store.add_source(source, prepared)
        logger.info("Ingested '%s' as %s (%d passages)", source.title, source.id, len(prepared))

        return IngestionReport(
            source=source.model_copy(update={"chunk_count": len(prepared)}),
            passages_total=len(prepared),
            passages_embedded=embedded,
            embedding_failures=failures,
        )
