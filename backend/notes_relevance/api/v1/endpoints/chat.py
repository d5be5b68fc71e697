from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, status
from openai import OpenAIError

from notes_relevance.api.v1.schemas.chat import ChatRequest  # noqa: TCH001
from notes_relevance.core.schemas.chat import ChatAnswer
from notes_relevance.dependencies import get_chat_service, get_current_user
from notes_relevance.utils.logging import get_logger

if TYPE_CHECKING:
    from notes_relevance.core.schemas.auth import AuthUser
    from notes_relevance.core.services.chat_service import ChatService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/", response_model=ChatAnswer)
async def chat_with_notes(
    payload: ChatRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """Answer a question using only the user's most relevant notes."""
    try:
        return await service.answer(user_id=current_user.id, message=payload.message)
    except OpenAIError as err:
        logger.error("Chat model call failed: %s", err, extra={"user_id": str(current_user.id)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Language model request failed",
        ) from err
