from __future__ import annotations

from typing import TYPE_CHECKING

from notes_relevance.config import settings
from notes_relevance.core.schemas.chat import ChatAnswer, ChatDebug
from notes_relevance.utils.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from openai import AsyncOpenAI  # type: ignore[import-not-found]

    from notes_relevance.core.services.retrieval_service import RetrievalService

logger = get_logger(__name__)

NO_INFO_ANSWER = "I don't have info to provide that answer"

INSTRUCTIONS = (
    "You are an AI assistant that ONLY answers questions based on the user's provided notes. "
    "Your role is to help users find information from their personal note collection.\n\n"
    "IMPORTANT RULES:\n"
    "1. ONLY use information from the provided context\n"
    f'2. If the context doesn\'t contain enough information to answer the question, say "{NO_INFO_ANSWER}"\n'
    "3. Do not use any external knowledge or make assumptions beyond what's in the context\n"
    "4. When referencing information, mention which note it comes from by using the note title in quotes\n"
    "5. Keep responses concise and helpful\n"
    "6. If you find relevant information but it's incomplete, acknowledge what you found and mention what's missing"
)


def build_prompt(context: str, message: str) -> str:
    return (
        "Context from your notes (ordered by relevance):\n"
        f"{context}\n\n"
        f"User question: {message}\n\n"
        "Please provide a helpful answer based only on the information in your notes above. "
        "When referencing specific information, mention which note it comes from."
    )


class ChatService:
    """Retrieval-augmented question answering over the user's notes."""

    def __init__(self, retrieval: RetrievalService, openai_client: AsyncOpenAI, model: str | None = None) -> None:
        self._retrieval = retrieval
        self._client = openai_client
        self._model = model or settings.chat_model

    async def answer(self, *, user_id: UUID, message: str) -> ChatAnswer:
        logger.info("Processing chat request", extra={"user_id": str(user_id), "message_length": len(message)})
        retrieved = await self._retrieval.retrieve(user_id=user_id, message=message)

        if retrieved.has_context:
            response = await self._client.responses.create(
                model=self._model,
                instructions=INSTRUCTIONS,
                input=build_prompt(retrieved.context, message),
            )
            text = response.output_text
            logger.debug("Generated response: %d characters", len(text))
        else:
            logger.info("No matching notes; skipping model call")
            text = NO_INFO_ANSWER

        return ChatAnswer(
            response=text,
            source_notes=retrieved.source_notes,
            debug=ChatDebug(
                total_matches=retrieved.total_matches,
                context_length=len(retrieved.context),
                has_context=retrieved.has_context,
                embedding_model=self._retrieval.provider.model_name,
                response_model=self._model,
            ),
        )
