"""
Analysis API endpoint.

Routes:
- POST /analyze - Diagnose an image, grounded in stored documents

Dependencies: visual_rag.application.services.analysis_service, visual_rag.models
System role: Analysis HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from visual_rag.api.deps import get_analysis_service
from visual_rag.application.services.analysis_service import AnalysisService
from visual_rag.models.analysis import AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


@router.post("", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    """
    Run the analysis pipeline on one frame.

    Args:
        request: Image, optional question, category, prompt and session key
        analysis_service: Injected AnalysisService

    Returns:
        AnalyzeResponse: Answer (or explicit blocked/empty message), context and matches

    Raises:
        ValidationError(400): Missing, malformed or unsupported image
        ConfigurationError(500): Gemini not configured
        UpstreamServiceError(502): Generation failed
    """
    return await analysis_service.analyze(request)
