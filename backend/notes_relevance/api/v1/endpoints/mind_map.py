from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from notes_relevance.core.models.graph import MindMap
from notes_relevance.dependencies import get_current_user, get_mind_map_service

if TYPE_CHECKING:
    from notes_relevance.core.schemas.auth import AuthUser
    from notes_relevance.core.services.mind_map_service import MindMapService

router = APIRouter()


@router.get("/", response_model=MindMap)
async def get_mind_map(
    current_user: AuthUser = Depends(get_current_user),
    service: MindMapService = Depends(get_mind_map_service),
) -> MindMap:
    """Return the note/keyword/tag graph rebuilt from the user's current notes."""
    return await service.generate(user_id=current_user.id)
