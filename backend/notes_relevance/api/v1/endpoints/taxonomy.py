from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from notes_relevance.core.relevance import SortKey
from notes_relevance.core.schemas.taxonomy import NoteTaxonomy
from notes_relevance.dependencies import get_current_user, get_search_service

if TYPE_CHECKING:
    from notes_relevance.core.schemas.auth import AuthUser
    from notes_relevance.core.services.search_service import SearchService


router = APIRouter()


@router.get("/taxonomy", response_model=NoteTaxonomy)
async def get_user_taxonomy(
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
) -> NoteTaxonomy:
    """Return the sorted, unique tags across the user's notes (for tag filters)."""
    return await service.taxonomy(user_id=current_user.id)


@router.get("/sort-keys", response_model=list[str])
async def list_sort_keys() -> list[str]:
    """Return the secondary orders accepted by note search."""
    return [k.value for k in SortKey]
