"""
Chat domain models and schemas.

Request/response schemas for the assistant and conversation titles.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any, Literal

from pydantic import Field

from q5search.models.common import CamelModel


class ChatMessage(CamelModel):
    """Single conversation turn."""

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(default="", description="Message text")


class UserProfile(CamelModel):
    """Profile of the signed-in user, as sent by the client."""

    id: str | None = None
    full_name: str | None = None
    role: str | None = None
    current_title: str | None = None
    affiliation: str | None = None
    skills: str | None = None
    focus_areas: str | None = None
    short_bio: str | None = None


class ChatRequest(CamelModel):
    """Request schema for the assistant."""

    messages: list[ChatMessage] = Field(min_length=1, description="Conversation so far, last turn is the user's")
    user_profile: UserProfile | None = Field(default=None, description="Signed-in user's profile")


class ContextReference(CamelModel):
    """Retrieved document referenced in the prompt context."""

    link: str
    type: str
    title: str | None = None
    similarity: float


class ChatAnswer(CamelModel):
    """Complete (non-streamed) assistant answer."""

    answer: str
    references: list[ContextReference]


class TitleRequest(CamelModel):
    input_text: str = Field(min_length=1, description="First user message of the conversation")


class TitleResponse(CamelModel):
    title: str


def profile_to_dict(profile: UserProfile | dict[str, Any] | None) -> dict[str, Any] | None:
    if profile is None:
        return None
    if isinstance(profile, UserProfile):
        return profile.model_dump()
    return dict(profile)
