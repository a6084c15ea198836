"""
Indexing configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Indexing pipeline configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from q5search.configs.base import BaseSettings


class IndexingSettings(BaseSettings):
    """Indexing pipeline configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INDEXING_",
        case_sensitive=False,
        extra="ignore",
    )

    enforce_unique_links: bool = Field(
        default=False,
        description=(
            "Insert with ON CONFLICT DO NOTHING; requires the unique "
            "(type, link) index created by create_tables --unique-links"
        ),
    )
