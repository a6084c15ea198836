"""
Text-generation provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chat model configuration for the assistant
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from q5search.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Chat model configuration for answers and conversation titles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Generation provider: 'openai' or 'google'",
    )
    openai_chat_model: str = Field(default="gpt-4o", description="OpenAI chat model")
    openai_title_model: str = Field(default="gpt-4o-mini", description="OpenAI model for chat titles")
    google_chat_model: str = Field(default="gemini-2.0-flash", description="Gemini chat model")
    google_title_model: str = Field(default="gemini-2.0-flash-lite", description="Gemini model for chat titles")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound on a full (or streamed) generation in seconds",
    )
