"""Chat API endpoints.

Routes:
- POST /chat - Stream an assistant answer using Server-Sent Events (SSE)
- POST /chat/title - Generate a short conversation title

Dependencies: q5search.application.services.chat_service
System role: Assistant HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from q5search.api.deps import get_chat_service
from q5search.application.services.chat_service import ChatService
from q5search.core.exceptions import GenerationError, ValidationError
from q5search.models.chat import ChatRequest, TitleRequest, TitleResponse, profile_to_dict
from q5search.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def chat_stream(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream the assistant's answer using Server-Sent Events (SSE).

    SSE Format:
        event: context
        data: {"references": [...]}

        event: token
        data: {"token": "...", "index": 0}

        event: complete
        data: {"full_answer": "..."}

        event: error
        data: {"code": "...", "message": "..."}

    Args:
        request: ChatRequest with messages and optional user profile
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: SSE stream of chat events
    """
    if not any(m.role == "user" for m in request.messages):
        raise HTTPException(status_code=400, detail="Conversation has no user message")

    user_profile = profile_to_dict(request.user_profile)

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE events from chat stream."""
        try:
            async for event in chat_service.stream(request.messages, user_profile):
                yield event.to_sse()
            logger.info(f"{__name__}:chat_stream - Stream completed")
        except ValidationError as e:
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "INVALID_REQUEST", "message": e.message},
            ).to_sse()
        except Exception as e:
            logger.error(f"{__name__}:chat_stream - {type(e).__name__}: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "PROCESSING_ERROR", "message": str(e)},
            ).to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@router.post("/title", response_model=TitleResponse)
async def chat_title(
    request: TitleRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> TitleResponse:
    """
    Generate a 3-5 word title from the first user message.

    Raises:
        HTTPException(400): Blank input
        HTTPException(502): Title model failure
    """
    try:
        title = await chat_service.generate_title(request.input_text)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except GenerationError as e:
        logger.error(f"{__name__}:chat_title - {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return TitleResponse(title=title)
