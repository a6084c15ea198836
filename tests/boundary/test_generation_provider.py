"""
Test suite for GenerationProvider.

System role: Verification of the completion adapter
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessageChunk, HumanMessage, SystemMessage

from q5search.boundary.providers.generation_provider import GenerationProvider, create_chat_model
from q5search.configs.generation import GenerationSettings
from q5search.core.exceptions import GenerationError

MESSAGES = [SystemMessage(content="You are helpful."), HumanMessage(content="Hi")]


@pytest.fixture
def generation_settings() -> GenerationSettings:
    return GenerationSettings(timeout_seconds=5.0)


class TestGenerationProvider:
    @pytest.mark.asyncio
    async def test_generate_should_return_model_text(self, generation_settings) -> None:
        provider = GenerationProvider(
            generation_settings, chat_model=FakeListChatModel(responses=["Hello there"])
        )

        answer = await provider.generate(MESSAGES)

        assert answer == "Hello there"

    @pytest.mark.asyncio
    async def test_stream_should_yield_tokens_forming_full_answer(self, generation_settings) -> None:
        provider = GenerationProvider(
            generation_settings, chat_model=FakeListChatModel(responses=["Hello there"])
        )

        tokens = [token async for token in provider.stream(MESSAGES)]

        assert len(tokens) > 1
        assert "".join(tokens) == "Hello there"

    @pytest.mark.asyncio
    async def test_generate_should_wrap_provider_failure(self, generation_settings) -> None:
        # Arrange
        model = MagicMock()
        model.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        provider = GenerationProvider(generation_settings, chat_model=model)

        # Act & Assert
        with pytest.raises(GenerationError, match="quota exceeded"):
            await provider.generate(MESSAGES)

    def test_create_chat_model_should_reject_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Invalid GENERATION_PROVIDER"):
            create_chat_model(GenerationSettings(provider="bedrock"))


def tracked_stream(closed: list[bool], contents: list[str], error: Exception | None = None):
    async def astream(messages):
        try:
            for content in contents:
                yield AIMessageChunk(content=content)
            if error is not None:
                raise error
            await asyncio.sleep(60)
        finally:
            closed.append(True)

    return astream


class TestGenerationStreamCleanup:
    @pytest.mark.asyncio
    async def test_consumer_closing_early_should_close_model_stream(self, generation_settings) -> None:
        # Arrange
        closed: list[bool] = []
        model = MagicMock()
        model.astream = tracked_stream(closed, ["Hel", "lo"])
        provider = GenerationProvider(generation_settings, chat_model=model)

        # Act
        tokens = provider.stream(MESSAGES)
        first = await tokens.__anext__()
        await tokens.aclose()

        # Assert
        assert first == "Hel"
        assert closed == [True]

    @pytest.mark.asyncio
    async def test_deadline_should_raise_and_close_model_stream(self) -> None:
        # Arrange
        closed: list[bool] = []
        model = MagicMock()
        model.astream = tracked_stream(closed, ["partial"])
        provider = GenerationProvider(GenerationSettings(timeout_seconds=0.05), chat_model=model)

        # Act
        received = []
        with pytest.raises(GenerationError, match="TimeoutError"):
            async for token in provider.stream(MESSAGES):
                received.append(token)

        # Assert
        assert received == ["partial"]
        assert closed == [True]

    @pytest.mark.asyncio
    async def test_provider_error_should_be_wrapped_and_close_model_stream(self, generation_settings) -> None:
        closed: list[bool] = []
        model = MagicMock()
        model.astream = tracked_stream(closed, [], error=RuntimeError("connection dropped"))
        provider = GenerationProvider(generation_settings, chat_model=model)

        with pytest.raises(GenerationError, match="connection dropped"):
            async for _ in provider.stream(MESSAGES):
                pass

        assert closed == [True]
