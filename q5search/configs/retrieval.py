"""
Retrieval configuration settings.

Thresholds and result counts used by each consumer of the retrieval service.
Lower thresholds favour recall and are used where results are post-filtered
by entity type.

Dependencies: pydantic, pydantic_settings
System role: Retrieval tuning for chat, recommendations and feed
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from q5search.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Per-consumer retrieval parameters."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    chat_threshold: float = Field(default=0.1, description="Similarity cutoff for chat grounding")
    chat_top_k: int = Field(default=10, description="Documents retrieved for chat grounding")

    recommend_threshold: float = Field(default=0.1, description="Similarity cutoff for job recommendations")
    recommend_top_k: int = Field(default=50, description="Candidates retrieved before filtering to jobs")
    recommend_limit: int = Field(default=2, description="Maximum recommended job IDs")

    feed_threshold: float = Field(default=0.1, description="Similarity cutoff for the semantic feed strategy")
    feed_top_k: int = Field(default=40, description="Candidates retrieved before filtering to posts")
    feed_social_limit: int = Field(default=20, description="Most recent posts taken from connections")

    strict_provider_check: bool = Field(
        default=True,
        description="Raise on documents embedded by a different provider (else drop with a warning)",
    )
