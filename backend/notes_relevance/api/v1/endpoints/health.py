from __future__ import annotations

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from notes_relevance.config import settings
from notes_relevance.db.base import get_supabase_admin_client
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _probe_table(table: str) -> str:
    try:
        client = get_supabase_admin_client()
        await asyncio.to_thread(lambda: client.table(table).select("id").limit(1).execute())
    except Exception as e:
        logger.warning("Readiness probe failed for %s: %s", table, e)
        return f"error: {str(e)}"
    return "connected"


@router.get("/")
async def health_check():
    """Liveness only; never touches the stores."""
    return {"status": "healthy", "service": "notes-relevance-api", "version": "0.1.0"}


@router.get("/ready")
async def readiness_check():
    """Probe the note store and, when it lives in Postgres, the chunk store."""
    notes_status = await _probe_table("notes")
    if settings.vector_store == "memory":
        embeddings_status = "in-memory"
    else:
        embeddings_status = await _probe_table("notes_embeddings")

    ready = notes_status == "connected" and embeddings_status in {"connected", "in-memory"}
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if ready else "degraded",
            "notes_store": notes_status,
            "embeddings_store": embeddings_status,
            "embedding_provider": settings.embedding_provider,
            "embedding_dimensions": settings.embedding_dimensions,
        },
    )
