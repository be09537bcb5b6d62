"""
Speech API endpoints.

Routes:
- POST /speech/synthesize - Text to MP3 audio
- POST /speech/transcribe - Multipart audio upload to text

Dependencies: visual_rag.application.services.speech_service, visual_rag.models
System role: Voice input/output HTTP API
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from visual_rag.api.deps import get_speech_service
from visual_rag.application.services.speech_service import NO_SPEECH_MESSAGE, SpeechService
from visual_rag.models.speech import SynthesizeRequest, TranscribeResponse

router = APIRouter(prefix="/speech", tags=["speech"])


@router.post("/synthesize", response_class=Response)
async def synthesize_speech(
    request: SynthesizeRequest,
    speech_service: SpeechService = Depends(get_speech_service),
) -> Response:
    """
    Synthesize speech.

    Returns:
        Response: audio/mpeg body
    """
    audio = await speech_service.synthesize(request.text)
    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Length": str(len(audio))},
    )


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe_speech(
    audio: UploadFile = File(...),
    speech_service: SpeechService = Depends(get_speech_service),
) -> TranscribeResponse:
    result = await speech_service.transcribe(await audio.read())
    return TranscribeResponse(
        transcript=result.transcript,
        message=None if result.recognized else NO_SPEECH_MESSAGE,
    )
