from __future__ import annotations

import logging
import sys

from notes_relevance.config import settings


def setup_logging() -> None:
    """Setup basic logging for the application."""

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    # Supabase's HTTP client logs every PostgREST request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info(
        "Logging configured successfully",
        extra={"level": settings.log_level, "embedding_provider": settings.embedding_provider},
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
