from __future__ import annotations

from fastapi import APIRouter

from .endpoints import chat, health, mind_map, notes, taxonomy

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(mind_map.router, prefix="/mind-map", tags=["mind-map"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
api_router.include_router(taxonomy.router, prefix="/metadata", tags=["metadata"])
