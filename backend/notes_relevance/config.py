from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str

    # OpenAI (optional; only needed for the openai embedding provider and chat)
    openai_api_key: str = ""
    embedding_model: str = "text-embedding-3-small"
    chat_model: str = "gpt-5-mini"

    # Embeddings and retrieval
    embedding_provider: Literal["local", "openai"] = "local"
    embedding_dimensions: int = 384
    vector_store: Literal["supabase", "memory"] = "supabase"
    chunk_size: int = 800
    chunk_overlap: int = 200
    min_chunk_length: int = 50
    match_threshold: float = 0.1  # Low threshold favours recall
    match_count: int = 8
    max_chunks_per_note: int = 3
    max_source_notes: int = 4

    # Search, keywords and mind map
    corpus_limit: int = 500
    search_page_size: int = 12
    keyword_limit: int = 5
    semantic_edge_threshold: float = 0.3
    mind_map_similarity_cap: int = 10  # Bounds the O(n^2) similarity pass


settings = Settings()
