"""
Embedding provider configuration settings.

Selects one of the two interchangeable embedding providers. Index and query
vectors must come from the same provider/model pair, so this setting applies
to indexing and retrieval alike.

Dependencies: pydantic, pydantic_settings
System role: Embedding adapter configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from q5search.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (OpenAI or Google)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai' or 'google'",
    )
    openai_model: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model ID",
    )
    google_model: str = Field(
        default="models/text-embedding-004",
        description="Google Generative AI embedding model ID",
    )
    dimension: int | None = Field(
        default=1536,
        description="Expected vector length (must match the search_documents column); None disables the check",
    )

    timeout_seconds: float = Field(default=20.0, description="Per-call timeout in seconds")
    max_attempts: int = Field(default=3, description="Maximum attempts per embedding call", ge=1)
    retry_initial_wait: float = Field(default=1.0, description="Initial retry backoff in seconds")
    retry_max_wait: float = Field(default=10.0, description="Maximum retry backoff in seconds")
