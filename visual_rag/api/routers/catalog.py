"""
Catalog API endpoints.

Routes:
- GET /categories - Defined and auto-detected categories with usage counts
- GET /prompts - Active analysis prompts
- GET /stats - Document, pipeline and error statistics

Dependencies: visual_rag.application.services.catalog_service, visual_rag.models
System role: Catalog and statistics HTTP API
"""

from fastapi import APIRouter, Depends

from visual_rag.api.deps import get_catalog_service
from visual_rag.application.services.catalog_service import CatalogService
from visual_rag.models.catalog import CategoryListResponse, PromptListResponse, StatsResponse

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> CategoryListResponse:
    return CategoryListResponse(categories=await catalog_service.list_categories())


@router.get("/prompts", response_model=PromptListResponse)
async def list_analysis_prompts(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> PromptListResponse:
    return PromptListResponse(prompts=await catalog_service.list_prompts())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> StatsResponse:
    return await catalog_service.get_stats()
