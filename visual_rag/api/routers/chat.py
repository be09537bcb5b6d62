"""
Chat API endpoint.

Routes:
- POST /chat - Text-only follow-up question, optionally within a session

Dependencies: visual_rag.application.services.chat_service, visual_rag.models
System role: Follow-up chat HTTP API
"""

from fastapi import APIRouter, Depends

from visual_rag.api.deps import get_chat_service
from visual_rag.application.services.chat_service import ChatService
from visual_rag.models.chat import ChatRequest, ChatResponse

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a follow-up question without a new frame.

    Raises:
        ValidationError(400): Empty prompt
        ConfigurationError(500): Gemini not configured
        UpstreamServiceError(502): Chat call failed
    """
    return await chat_service.chat(request)
