"""
Embedding provider adapter.

Turns text into a fixed-length vector through a LangChain Embeddings client
(OpenAI text-embedding-3-small or Google text-embedding-004). The two
providers produce vectors in different spaces; the adapter reports its
ProviderId so documents and queries can be paired.

Dependencies: langchain_openai, langchain_google_genai, tenacity, q5search.configs
System role: Embedding generation adapter
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from q5search.boundary.vdb.vector_schemas import ProviderId
from q5search.configs.embedding import EmbeddingSettings
from q5search.core.exceptions import EmbeddingError, ValidationError

logger = logging.getLogger(__name__)


def create_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Build the LangChain embeddings client for the configured provider.

    Args:
        settings: Embedding settings

    Returns:
        Embeddings: Provider client

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = settings.provider.lower()

    if provider == ProviderId.OPENAI.value:
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(model=settings.openai_model)

    if provider == ProviderId.GOOGLE.value:
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        return GoogleGenerativeAIEmbeddings(model=settings.google_model)

    raise ValueError(
        f"Invalid EMBEDDING_PROVIDER: {settings.provider}. Must be 'openai' or 'google'."
    )


class EmbeddingProvider:
    """
    Async embedding adapter with timeout and bounded retry.

    Each call is limited to settings.timeout_seconds and retried up to
    settings.max_attempts times with exponential jitter backoff. A vector of
    unexpected length is a hard failure and is not retried.
    """

    def __init__(
        self,
        settings: EmbeddingSettings,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize embedding provider.

        Args:
            settings: Embedding settings (provider, model, timeout, retry policy)
            embeddings: Optional pre-built client (created from settings if None)
        """
        self._settings = settings
        self._provider_id = ProviderId(settings.provider.lower())
        self._embeddings = embeddings if embeddings is not None else create_embeddings(settings)
        logger.info(
            f"{__name__}:__init__ - Initialized with provider={self._provider_id.value}, "
            f"model={self.model_id}, dimension={settings.dimension}"
        )

    @property
    def provider_id(self) -> ProviderId:
        """Provider whose vector space this adapter produces."""
        return self._provider_id

    @property
    def model_id(self) -> str:
        if self._provider_id == ProviderId.GOOGLE:
            return self._settings.google_model
        return self._settings.openai_model

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed (must not be blank)

        Returns:
            list[float]: Embedding vector

        Raises:
            ValidationError: If text is blank
            EmbeddingError: If every attempt fails or the vector has the wrong length
        """
        if not text or not text.strip():
            raise ValidationError("Cannot embed empty text", field="text")

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.max_attempts),
                wait=wait_exponential_jitter(
                    initial=self._settings.retry_initial_wait,
                    max=self._settings.retry_max_wait,
                ),
                retry=retry_if_exception_type(Exception),
                before_sleep=lambda retry_state: logger.warning(
                    f"{__name__}:embed - Retry {retry_state.attempt_number}/"
                    f"{self._settings.max_attempts} after {type(retry_state.outcome.exception()).__name__}"
                ),
                reraise=True,
            ):
                with attempt:
                    vector = await asyncio.wait_for(
                        self._embeddings.aembed_query(text),
                        timeout=self._settings.timeout_seconds,
                    )
        except Exception as e:
            raise EmbeddingError(
                message=f"Embedding request failed: {type(e).__name__}: {e}",
                provider=self._provider_id.value,
                details={"model": self.model_id, "text_length": len(text)},
            ) from e

        expected = self._settings.dimension
        if expected is not None and len(vector) != expected:
            raise EmbeddingError(
                message=f"Embedding has {len(vector)} dimensions, expected {expected}",
                provider=self._provider_id.value,
                details={"model": self.model_id},
            )
        return list(vector)
