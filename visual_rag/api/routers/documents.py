"""
Document API endpoints.

Routes:
- POST /documents - Register one document
- POST /documents/batch - Register up to 50 documents
- GET /documents - List active documents
- PATCH /documents/{id} - Update a document
- DELETE /documents/{id} - Soft (default) or hard delete

Dependencies: visual_rag.application.services.document_service, visual_rag.models
System role: Document management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from visual_rag.api.deps import get_document_service
from visual_rag.application.services.document_service import DocumentService
from visual_rag.models.document import (
    BatchRegisterRequest,
    BatchRegisterResponse,
    DocumentCreateRequest,
    DocumentDeleteResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse)
async def register_document(
    request: DocumentCreateRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Register a troubleshooting document.

    Raises:
        ValidationError(400): Missing title/content, limits exceeded, bad image
        UpstreamServiceError(502): Image embedding failed
    """
    document, warnings, suggested = await document_service.register(request)
    return DocumentResponse(document=document, warnings=warnings, suggested_tags=suggested)


@router.post("/batch", response_model=BatchRegisterResponse)
async def register_documents(
    request: BatchRegisterRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> BatchRegisterResponse:
    """Register several documents; one entry failing does not stop the others."""
    results = await document_service.register_batch(request.entries)
    registered = sum(1 for r in results if r.success)
    logger.info(f"{__name__}:register_documents - registered={registered} failed={len(results) - registered}")
    return BatchRegisterResponse(
        results=results,
        registered=registered,
        failed=len(results) - registered,
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    category: str | None = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    documents = await document_service.list_documents(category=category, limit=limit, offset=offset)
    return DocumentListResponse(documents=documents, count=len(documents), limit=limit, offset=offset)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    request: DocumentUpdateRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await document_service.update(document_id, request)
    return DocumentResponse(document=document)


@router.delete("/{document_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    document_id: str,
    hard: bool = False,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Delete a document.

    Args:
        document_id: Document UUID
        hard: Remove the row instead of marking it inactive

    Raises:
        DocumentNotFoundError(404): Unknown id
    """
    await document_service.delete(document_id, hard=hard)
    return DocumentDeleteResponse(document_id=document_id, hard=hard)
