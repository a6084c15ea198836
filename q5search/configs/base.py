"""
Shared settings base for the search service.

Every settings group (database, embedding, generation, retrieval, indexing)
reads the same .env file and inherits the deployment-wide fields below.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Deployment-wide fields shared by every settings group."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name reported at startup (development, staging, production)",
    )
    debug: bool = Field(
        default=False,
        description="Run the API with FastAPI debug tracebacks",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging",
    )
