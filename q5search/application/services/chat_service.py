"""
Chat service for the platform assistant.

Orchestrates one assistant turn: build the search input (optionally enriched
with the user's profile keywords), retrieve context, fetch platform stats,
render the system prompt and generate the answer, either complete or as a
stream of events.

Dependencies: q5search.core, q5search.boundary.providers, langchain_core
System role: Chat service orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from q5search.boundary.vdb.vector_schemas import SearchResult
from q5search.configs.retrieval import RetrievalSettings
from q5search.core.exceptions import GenerationError, RetrievalError, ValidationError
from q5search.core.prompts.assistant_prompt import (
    ANONYMOUS_USER,
    ASSISTANT_PROMPT,
    CONTEXT_SEPARATOR,
    NO_CONTEXT_FALLBACK,
    NOT_FOUND_PHRASE,
    TITLE_PROMPT,
)
from q5search.models.chat import ChatAnswer, ChatMessage, ContextReference
from q5search.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

PERSONAL_MARKERS = ("my", "me", "i ", "recommend", "match", "suitable")
PROFILE_KEYWORD_FIELDS = ("skills", "focus_areas", "current_title", "role")


def build_search_input(query: str, user_profile: dict[str, Any] | None) -> str:
    """
    Search input for an assistant turn.

    When the message reads as personal and a profile is supplied, the
    profile's skills, focus areas, current title and role are appended.
    """
    if not user_profile:
        return query
    lowered = query.lower()
    if not any(marker in lowered for marker in PERSONAL_MARKERS):
        return query
    keywords = " ".join(
        str(user_profile[name]).strip()
        for name in PROFILE_KEYWORD_FIELDS
        if user_profile.get(name) and str(user_profile[name]).strip()
    )
    return f"{query} {keywords}" if keywords else query


def build_context(results: Sequence[SearchResult]) -> str:
    """Annotate each document with its ID and Type and join them; fallback text when empty."""
    if not results:
        return NO_CONTEXT_FALLBACK
    return CONTEXT_SEPARATOR.join(
        f"{result.content}\nID: {result.metadata.link}\nType: {result.metadata.type.value}"
        for result in results
    )


def build_user_context(user_profile: dict[str, Any] | None) -> str:
    if not user_profile:
        return ANONYMOUS_USER
    return "\n".join([
        "**Current User Context:**",
        f"- **Name:** {user_profile.get('full_name') or 'Unknown'}",
        f"- **Role:** {user_profile.get('role') or user_profile.get('current_title') or 'Unknown'}",
        f"- **Skills:** {user_profile.get('skills') or 'N/A'}",
        f"- **Focus Areas:** {user_profile.get('focus_areas') or 'N/A'}",
        f"- **Bio:** {user_profile.get('short_bio') or 'N/A'}",
        f"- **ID:** {user_profile.get('id') or 'N/A'}",
    ])


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    return [
        HumanMessage(content=m.content) if m.role == "user" else AIMessage(content=m.content)
        for m in messages
    ]


class ChatService:
    """
    Assistant over the search index.

    Retrieval failures degrade to the empty-context fallback and generation
    still proceeds; generation failures propagate as GenerationError.
    """

    def __init__(
        self,
        retrieval_service,
        platform_reader,
        generator,
        title_generator,
        settings: RetrievalSettings,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retrieval_service: RetrievalService for context
            platform_reader: PlatformReader for headline stats
            generator: GenerationProvider for answers
            title_generator: GenerationProvider for conversation titles
            settings: Retrieval thresholds and top-k
        """
        self.retrieval_service = retrieval_service
        self.platform_reader = platform_reader
        self.generator = generator
        self.title_generator = title_generator
        self.settings = settings

    async def _retrieve(self, search_input: str) -> list[SearchResult]:
        try:
            return await self.retrieval_service.search(
                search_input,
                threshold=self.settings.chat_threshold,
                top_k=self.settings.chat_top_k,
            )
        except RetrievalError as e:
            logger.error(f"{__name__}:_retrieve - Retrieval failed, answering without context: {e}")
            return []

    async def prepare(
        self,
        messages: Sequence[ChatMessage],
        user_profile: dict[str, Any] | None = None,
    ) -> tuple[list[BaseMessage], list[ContextReference]]:
        """
        Build the prompt messages for a turn.

        Args:
            messages: Conversation so far
            user_profile: Signed-in user's profile fields, if any

        Returns:
            Prompt messages and the references of the retrieved documents

        Raises:
            ValidationError: If the conversation has no user message
        """
        user_turns = [m for m in messages if m.role == "user"]
        if not user_turns:
            raise ValidationError("Conversation has no user message", field="messages")

        search_input = build_search_input(user_turns[-1].content, user_profile)
        results, stats = await asyncio.gather(
            self._retrieve(search_input),
            self.platform_reader.get_stats(),
        )
        logger.info(f"{__name__}:prepare - Retrieved {len(results)} document(s)")

        prompt_messages = ASSISTANT_PROMPT.format_messages(
            **stats,
            context=build_context(results),
            user_context=build_user_context(user_profile),
            not_found=NOT_FOUND_PHRASE,
            messages=to_langchain_messages(messages),
        )
        references = [
            ContextReference(
                link=r.metadata.link,
                type=r.metadata.type.value,
                title=r.metadata.title,
                similarity=r.similarity,
            )
            for r in results
        ]
        return prompt_messages, references

    async def answer(
        self,
        messages: Sequence[ChatMessage],
        user_profile: dict[str, Any] | None = None,
    ) -> ChatAnswer:
        """
        Answer the latest user message.

        Returns:
            ChatAnswer: Full answer text and context references

        Raises:
            ValidationError: If the conversation has no user message
            GenerationError: If the completion provider fails
        """
        prompt_messages, references = await self.prepare(messages, user_profile)
        answer = await self.generator.generate(prompt_messages)
        return ChatAnswer(answer=answer, references=references)

    async def stream(
        self,
        messages: Sequence[ChatMessage],
        user_profile: dict[str, Any] | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream an answer as events.

        Yields:
            StreamEvent: context, then token events, then complete (or error)

        Raises:
            ValidationError: If the conversation has no user message
        """
        prompt_messages, references = await self.prepare(messages, user_profile)
        yield StreamEvent(
            event=StreamEventType.CONTEXT,
            data={"references": [r.model_dump(by_alias=True) for r in references]},
        )

        parts: list[str] = []
        try:
            async for token in self.generator.stream(prompt_messages):
                yield StreamEvent(
                    event=StreamEventType.TOKEN,
                    data={"token": token, "index": len(parts)},
                )
                parts.append(token)
        except GenerationError as e:
            logger.error(f"{__name__}:stream - Generation failed after {len(parts)} token(s): {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "GENERATION_FAILED", "message": e.message},
            )
            return

        yield StreamEvent(event=StreamEventType.COMPLETE, data={"full_answer": "".join(parts)})

    async def generate_title(self, input_text: str) -> str:
        """
        Short (3-5 word) title for a conversation from its first message.

        Raises:
            ValidationError: If input_text is blank
            GenerationError: If the title model fails
        """
        if not input_text or not input_text.strip():
            raise ValidationError("Cannot title an empty message", field="input_text")
        title = await self.title_generator.generate(
            TITLE_PROMPT.format_messages(input_text=input_text.strip())
        )
        return title.strip().strip('"').strip()
