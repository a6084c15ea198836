"""
Text-generation provider adapter.

Runs a chat model (OpenAI or Gemini through LangChain) over a prepared list
of messages, either to completion or as a token stream.

Dependencies: langchain_openai, langchain_google_genai, langchain_core, q5search.configs
System role: Completion adapter for the assistant and chat titles
"""

import asyncio
import logging
import time
from collections.abc import AsyncGenerator

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from q5search.configs.generation import GenerationSettings
from q5search.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


def create_chat_model(settings: GenerationSettings, title: bool = False) -> BaseChatModel:
    """
    Build the LangChain chat model for the configured provider.

    Args:
        settings: Generation settings
        title: Use the lighter model configured for conversation titles

    Returns:
        BaseChatModel: Chat model client

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = settings.provider.lower()

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=settings.openai_title_model if title else settings.openai_chat_model,
            temperature=settings.temperature,
        )

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.google_title_model if title else settings.google_chat_model,
            temperature=settings.temperature,
        )

    raise ValueError(
        f"Invalid GENERATION_PROVIDER: {settings.provider}. Must be 'openai' or 'google'."
    )


class GenerationProvider:
    """Chat model wrapper with a total-duration bound."""

    def __init__(
        self,
        settings: GenerationSettings,
        chat_model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize generation provider.

        Args:
            settings: Generation settings
            chat_model: Optional pre-built chat model (created from settings if None)
        """
        self._settings = settings
        self._model = chat_model if chat_model is not None else create_chat_model(settings)

    async def generate(self, messages: list[BaseMessage]) -> str:
        """
        Generate a complete response.

        Args:
            messages: System prompt followed by the conversation

        Returns:
            str: Response text

        Raises:
            GenerationError: On provider failure or timeout
        """
        try:
            response = await asyncio.wait_for(
                self._model.ainvoke(messages),
                timeout=self._settings.timeout_seconds,
            )
        except Exception as e:
            raise GenerationError(
                message=f"Generation failed: {type(e).__name__}: {e}",
                provider=self._settings.provider,
            ) from e
        return _message_text(response.content)

    async def stream(self, messages: list[BaseMessage]) -> AsyncGenerator[str, None]:
        """
        Stream response tokens.

        The whole stream must finish within settings.timeout_seconds.

        Args:
            messages: System prompt followed by the conversation

        Yields:
            str: Non-empty text chunks

        Raises:
            GenerationError: On provider failure or when the time budget is exhausted
        """
        deadline = time.monotonic() + self._settings.timeout_seconds
        chunks = self._model.astream(messages).__aiter__()
        try:
            while True:
                remaining = deadline - time.monotonic()
                try:
                    if remaining <= 0:
                        raise asyncio.TimeoutError()
                    chunk = await asyncio.wait_for(chunks.__anext__(), timeout=remaining)
                except StopAsyncIteration:
                    return
                except Exception as e:
                    raise GenerationError(
                        message=f"Streaming generation failed: {type(e).__name__}: {e}",
                        provider=self._settings.provider,
                    ) from e
                token = _message_text(chunk.content)
                if token:
                    yield token
        finally:
            # Also runs when the consumer stops iterating early
            await chunks.aclose()


def _message_text(content) -> str:
    # Gemini may return a list of content parts instead of a string
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            part if isinstance(part, str) else part.get("text", "")
            for part in content
        )
    return str(content or "")
