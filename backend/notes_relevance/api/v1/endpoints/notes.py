from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from notes_relevance.api.v1.schemas.note_search import NoteSearchRequest  # noqa: TCH001
from notes_relevance.background import generate_and_store_note_embeddings
from notes_relevance.config import settings
from notes_relevance.core.schemas.note_search import NoteSearchPage
from notes_relevance.core.services.embedding_service import build_note_text, chunk_text
from notes_relevance.dependencies import (
    get_background_embedding_repository,
    get_current_user,
    get_provider,
    get_search_service,
)

if TYPE_CHECKING:
    from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
    from notes_relevance.core.schemas.auth import AuthUser
    from notes_relevance.core.services.embedding_service import EmbeddingProvider
    from notes_relevance.core.services.search_service import SearchService

router = APIRouter()


@router.post("/search", response_model=NoteSearchPage)
async def search_notes(
    payload: NoteSearchRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Search notes for the authenticated user.

    Scores title, tag and content matches in-process; an empty query lists
    every note in the requested order.
    """
    return await service.search_notes(user_id=current_user.id, request=payload)


@router.get("/{note_id}/keywords", response_model=list[str])
async def get_note_keywords(
    note_id: UUID,
    limit: int = Query(default=settings.keyword_limit),
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Top TF-IDF keywords of a note against the user's notes; a negative limit is a 400."""
    try:
        keywords = await service.note_keywords(note_id=note_id, user_id=current_user.id, limit=limit)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if keywords is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return keywords


@router.post("/{note_id}/embeddings", status_code=status.HTTP_202_ACCEPTED)
async def generate_note_embeddings(
    note_id: UUID,
    background_tasks: BackgroundTasks,
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
    provider: EmbeddingProvider = Depends(get_provider),
    embedding_repo: EmbeddingRepository = Depends(get_background_embedding_repository),
):
    """Schedule (re)embedding of a note's chunks."""
    note = await service.get_note(note_id=note_id, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")

    total_chunks = len(
        chunk_text(
            build_note_text(note.title, note.content),
            chunk_size=settings.chunk_size,
            overlap=settings.chunk_overlap,
            min_length=settings.min_chunk_length,
        )
    )
    background_tasks.add_task(
        generate_and_store_note_embeddings,
        note_id=note.id,
        user_id=current_user.id,
        title=note.title,
        content=note.content,
        provider=provider,
        repo=embedding_repo,
    )
    return {
        "note_id": str(note.id),
        "total_chunks": total_chunks,
        "provider": provider.kind,
        "model": provider.model_name,
    }


@router.delete("/{note_id}/embeddings", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note_embeddings(
    note_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
    embedding_repo: EmbeddingRepository = Depends(get_background_embedding_repository),
):
    note = await service.get_note(note_id=note_id, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    await embedding_repo.delete_note_embeddings(note_id=note.id, user_id=current_user.id)
    return None
