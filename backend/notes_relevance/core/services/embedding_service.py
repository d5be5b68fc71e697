from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from notes_relevance.config import settings
from notes_relevance.core.relevance import EMBEDDING_DIMENSIONS, embed_text
from notes_relevance.core.schemas.retrieval import EmbeddingChunk
from notes_relevance.utils.logging import get_logger
from notes_relevance.utils.openai_client import get_openai_client
from notes_relevance.utils.validation import require_non_negative, require_positive

if TYPE_CHECKING:
    from uuid import UUID

    from openai import AsyncOpenAI

    from notes_relevance.config import Settings

logger = get_logger(__name__)


def build_note_text(title: str | None, content: str | None) -> str:
    """Concatenate title and content into a single string for embeddings.

    Keeps a stable delimiter so updates result in stable text shape.
    """
    safe_title = (title or "").strip()
    safe_content = (content or "").strip()
    if safe_title and safe_content:
        return f"{safe_title}\n\n{safe_content}"
    return safe_title or safe_content


def chunk_text(
    text: str,
    *,
    chunk_size: int = 800,
    overlap: int = 200,
    min_length: int = 50,
) -> list[str]:
    """Split text into overlapping windows for embedding.

    Windows start every ``chunk_size - overlap`` characters. Chunks whose
    stripped length is not above ``min_length`` are dropped; kept chunks are
    stripped.
    """
    require_positive(chunk_size, "chunk_size")
    require_non_negative(overlap, "overlap")
    require_non_negative(min_length, "min_length")
    if overlap >= chunk_size:
        raise ValueError(f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})")

    chunks: list[str] = []
    for start in range(0, len(text), chunk_size - overlap):
        chunk = text[start:start + chunk_size].strip()
        if len(chunk) > min_length:
            chunks.append(chunk)
    return chunks


class EmbeddingProvider(ABC):
    """Source of embedding vectors, selected by `APP_EMBEDDING_PROVIDER`."""

    kind: ClassVar[str]

    def __init__(self, dimensions: int = EMBEDDING_DIMENSIONS) -> None:
        self.dimensions = require_positive(dimensions, "dimensions")

    @property
    @abstractmethod
    def model_name(self) -> str:  # pragma: no cover
        """Human-readable model description reported in chat debug output."""

    @abstractmethod
    async def embed(self, text: str) -> list[float] | None:  # pragma: no cover
        """Return the vector for ``text`` or None if it could not be produced."""


class LocalEmbeddingProvider(EmbeddingProvider):
    """Deterministic hash embeddings computed in-process."""

    kind = "local"

    @property
    def model_name(self) -> str:
        return "Local Text Embeddings (No Dependencies)"

    async def embed(self, text: str) -> list[float] | None:
        return embed_text(text, self.dimensions)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embeddings truncated to the configured dimensions."""

    kind = "openai"

    def __init__(self, client: AsyncOpenAI, model: str, dimensions: int = EMBEDDING_DIMENSIONS) -> None:
        super().__init__(dimensions)
        self._client = client
        self._model = model

    @property
    def model_name(self) -> str:
        return self._model

    async def embed(self, text: str) -> list[float] | None:
        if not text:
            return None
        try:
            resp = await self._client.embeddings.create(
                model=self._model,
                input=text,
                dimensions=self.dimensions,
            )
            return resp.data[0].embedding
        except Exception as err:  # pragma: no cover - network errors
            logger.error("Failed to create embedding: %s", err)
            return None


def get_embedding_provider(config: Settings | None = None) -> EmbeddingProvider:
    cfg = config or settings
    if cfg.embedding_provider == "openai":
        logger.debug("Using OpenAI embedding provider (%s)", cfg.embedding_model)
        return OpenAIEmbeddingProvider(get_openai_client(), cfg.embedding_model, cfg.embedding_dimensions)
    return LocalEmbeddingProvider(cfg.embedding_dimensions)


async def embed_note_chunks(
    *,
    note_id: UUID,
    user_id: UUID,
    title: str | None,
    content: str | None,
    provider: EmbeddingProvider,
    config: Settings | None = None,
) -> tuple[list[EmbeddingChunk], int]:
    """Chunk a note and embed every chunk.

    Returns the embedded chunks and the number of chunks attempted; chunks the
    provider could not embed are skipped and logged.
    """
    cfg = config or settings
    text = build_note_text(title, content)
    pieces = chunk_text(
        text,
        chunk_size=cfg.chunk_size,
        overlap=cfg.chunk_overlap,
        min_length=cfg.min_chunk_length,
    )
    logger.info("Created %d chunks for note %s", len(pieces), note_id)

    embedded: list[EmbeddingChunk] = []
    for index, piece in enumerate(pieces):
        vector = await provider.embed(piece)
        if not vector:
            logger.warning("Skipping chunk %d of note %s: no embedding", index, note_id)
            continue
        embedded.append(
            EmbeddingChunk(
                note_id=note_id,
                user_id=user_id,
                chunk_index=index,
                content_chunk=piece,
                embedding=vector,
            )
        )
    return embedded, len(pieces)
