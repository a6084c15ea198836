"""
Streaming event schemas for Server-Sent Events chat.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONTEXT = "context"
    TOKEN = "token"
    COMPLETE = "complete"
    ERROR = "error"


class StreamEvent(BaseModel):
    """
    Streaming event.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    def to_sse(self) -> str:
        """Format as an SSE frame: 'event: {type}\\ndata: {json}\\n\\n'."""
        return f"event: {self.event.value}\ndata: {json.dumps(self.data)}\n\n"
