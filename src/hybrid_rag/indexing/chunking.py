"""
Passage chunking implementations.

Takes one document's raw text and splits it into overlapping passages
for embedding. Each chunker implements BaseChunker and is driven by
ChunkingConfig.

Choosing a strategy:

    "sentence_window"   Default. Fixed-size windows whose end snaps to
                        the last sentence break (or newline) within a
                        small lookahead. Transcripts keep their sentences
                        and timestamps together. No extra deps.

    "recursive"         RecursiveCharacterTextSplitter. Splits on
                        paragraphs → lines → words. Better for text with
                        strong paragraph structure.

Usage:
    from hybrid_rag.indexing.chunking import get_chunker
    from hybrid_rag.config import ChunkingConfig

    chunker = get_chunker(ChunkingConfig(chunk_size=500, chunk_overlap=100))
    passages = chunker.chunk(text, parent_source_id="src-1")
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from hybrid_rag.base.indexer import BaseChunker
from hybrid_rag.config import ChunkingConfig

# Characters a passage may end on when the boundary is snapped
SENTENCE_BREAKS = (".", "!", "?", "。", "\n")


class SentenceWindowChunker(BaseChunker):
    """
    Greedy forward scan with sentence-aware boundaries.

    For each window:
        1. Propose end = start + chunk_size.
        2. Unless that is already the end of the text, look at
           text[start : end + lookahead] and snap end to just after the
           last sentence break in it.
        3. Emit text[start:end], stripped, if non-empty.
        4. Next start = end - chunk_overlap, so neighbours share context.

    If stepping back by the overlap would not move past the current
    start (a break found very early in the window), the next window
    starts at end instead. That keeps the scan moving on any input.
    """

    def split_text(self, text: str) -> list[str]:
        clean = text.replace("\r\n", "\n").strip()
        size = self.config.chunk_size
        overlap = self.config.chunk_overlap
        lookahead = self.config.lookahead
        length = len(clean)

        pieces: list[str] = []
        start = 0

        while start < length:
            end = min(start + size, length)

            if end < length:
                window = clean[start:end + lookahead]
                split_point = max(window.rfind(mark) for mark in SENTENCE_BREAKS)
                if split_point > 0:
                    end = start + split_point + 1

            piece = clean[start:end].strip()
            if piece:
                pieces.append(piece)

            if end >= length:
                break

            next_start = end - overlap
            start = next_start if next_start > start else end

        return pieces


class RecursiveChunker(BaseChunker):
    """
    Splits text using a hierarchy of separators.

    RecursiveCharacterTextSplitter tries double newlines first
    (paragraph boundaries), then single newlines, then spaces, then
    characters. lookahead is ignored.
    """

    def __init__(self, config: ChunkingConfig):
        super().__init__(config)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=config.chunk_size,
            chunk_overlap=config.chunk_overlap,
            length_function=len,
            separators=["\n\n", "\n", " ", ""],
        )

    def split_text(self, text: str) -> list[str]:
        clean = text.replace("\r\n", "\n").strip()
        return [piece.strip() for piece in self._splitter.split_text(clean) if piece.strip()]


# ---------------------------------------------------------------------------
# Factory: pick the chunker from config
# ---------------------------------------------------------------------------

def get_chunker(config: ChunkingConfig) -> BaseChunker:
    """
    Factory that returns the right chunker based on config.strategy.

    Args:
        config: ChunkingConfig with strategy set.

    Returns:
        A BaseChunker implementation.

    Raises:
        ValueError: If the strategy is not recognized.
    """
    strategy = config.strategy.lower()

    if strategy == "sentence_window":
        return SentenceWindowChunker(config)

    elif strategy == "recursive":
        return RecursiveChunker(config)

    else:
        raise ValueError(
            f"Unknown chunking strategy: '{config.strategy}'. "
            f"Built-in strategies: 'sentence_window', 'recursive'. "
            f"For custom chunkers, subclass BaseChunker directly."
        )
