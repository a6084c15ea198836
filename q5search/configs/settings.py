"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from q5search.configs.base import BaseSettings
from q5search.configs.database import DatabaseSettings
from q5search.configs.embedding import EmbeddingSettings
from q5search.configs.generation import GenerationSettings
from q5search.configs.indexing import IndexingSettings
from q5search.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    embedding: EmbeddingSettings = EmbeddingSettings()
    generation: GenerationSettings = GenerationSettings()
    retrieval: RetrievalSettings = RetrievalSettings()
    indexing: IndexingSettings = IndexingSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from q5search.configs import get_settings
        settings = get_settings()
    """
    return Settings()
