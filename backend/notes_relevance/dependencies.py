from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notes_relevance.config import settings
from notes_relevance.core.repositories.implementations.memory.embedding_repository import (
    InMemoryEmbeddingRepository,
)
from notes_relevance.core.repositories.implementations.supabase.embedding_repository import (
    SupabaseEmbeddingRepository,
)
from notes_relevance.core.repositories.implementations.supabase.note_repository import (
    SupabaseNoteRepository,
)
from notes_relevance.core.schemas.auth import AuthUser
from notes_relevance.core.services.chat_service import ChatService
from notes_relevance.core.services.embedding_service import EmbeddingProvider, get_embedding_provider
from notes_relevance.core.services.mind_map_service import MindMapService
from notes_relevance.core.services.retrieval_service import RetrievalService
from notes_relevance.core.services.search_service import SearchService
from notes_relevance.db.base import create_request_supabase_client, get_supabase_admin_client
from notes_relevance.utils.logging import get_logger
from notes_relevance.utils.openai_client import get_openai_client

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

if TYPE_CHECKING:
    from supabase import Client

    from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
    from notes_relevance.core.repositories.note_repository import NoteRepository


async def _run_blocking(func):
    """Run blocking functions in a thread pool."""
    import asyncio
    return await asyncio.to_thread(func)


@lru_cache(maxsize=1)
def get_memory_embedding_repository() -> InMemoryEmbeddingRepository:
    """Process-wide chunk store used when `APP_VECTOR_STORE=memory`."""
    logger.info("Using in-memory embedding store")
    return InMemoryEmbeddingRepository()


@lru_cache(maxsize=1)
def get_provider() -> EmbeddingProvider:
    return get_embedding_provider(settings)


def get_request_supabase_client(request: Request) -> Client:
    """Create a request-scoped Supabase client and set PostgREST bearer.

    Extracts the Authorization: Bearer <jwt> header if present and configures
    PostgREST to enforce RLS for the user.
    """
    auth_header = request.headers.get("authorization") or request.headers.get("Authorization")
    jwt: str | None = None
    if auth_header and auth_header.lower().startswith("bearer "):
        jwt = auth_header.split(" ", 1)[1].strip()
    return create_request_supabase_client(jwt)


def get_note_repository(client: Client = Depends(get_request_supabase_client)) -> NoteRepository:
    """Get a request-scoped note repository instance using request client."""
    return SupabaseNoteRepository(client)


def get_embedding_repository(request: Request) -> EmbeddingRepository:
    """Chunk store for request-time matching, honouring `APP_VECTOR_STORE`."""
    if settings.vector_store == "memory":
        return get_memory_embedding_repository()
    return SupabaseEmbeddingRepository(get_request_supabase_client(request))


def get_background_embedding_repository() -> EmbeddingRepository:
    """Chunk store for background writes; uses the admin client to bypass RLS."""
    if settings.vector_store == "memory":
        return get_memory_embedding_repository()
    return SupabaseEmbeddingRepository(get_supabase_admin_client())


def get_search_service(repo: NoteRepository = Depends(get_note_repository)) -> SearchService:
    """Get a request-scoped search service instance."""
    return SearchService(repo)


def get_mind_map_service(repo: NoteRepository = Depends(get_note_repository)) -> MindMapService:
    return MindMapService(repo)


def get_retrieval_service(
    note_repo: NoteRepository = Depends(get_note_repository),
    embedding_repo: EmbeddingRepository = Depends(get_embedding_repository),
    provider: EmbeddingProvider = Depends(get_provider),
) -> RetrievalService:
    return RetrievalService(note_repo, embedding_repo, provider)


def get_chat_service(retrieval: RetrievalService = Depends(get_retrieval_service)) -> ChatService:
    """Construct ChatService with shared OpenAI client."""
    return ChatService(retrieval, get_openai_client())


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> AuthUser:
    """Validate JWT via Supabase and return authenticated user."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    jwt = credentials.credentials
    if not jwt or len(jwt.split(".")) != 3:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format",
            headers={"WWW-Authenticate": "Bearer"},
        )
    supabase = create_request_supabase_client(jwt)
    try:
        resp = await _run_blocking(lambda: supabase.auth.get_user(jwt))
    except Exception as err:
        error_msg = str(err).lower()
        logger.warning(
            "JWT validation failed",
            extra={
                "error_type": type(err).__name__,
                "error_summary": error_msg[:100] if error_msg else "Unknown error",
            }
        )
        detail = "Token is invalid or expired" if "invalid" in error_msg or "expired" in error_msg else "Authentication failed"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    user = getattr(resp, "user", None)
    user_id = getattr(user, "id", None) if user else None
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user data",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthUser(
        id=user_id,
        email=getattr(user, "email", None) or "",
        role=getattr(user, "role", None),
    )
