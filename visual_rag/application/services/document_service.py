"""
Document service orchestrator.

Registers, updates, lists and deletes troubleshooting documents. Content
rules are checked here so single and batch registration report the same
messages; an image, when given, is embedded before the row is written.

Dependencies: sqlalchemy, visual_rag.core, visual_rag.boundary.db.CRUD
System role: Document use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.rag_document_crud import rag_document_crud
from visual_rag.boundary.db.document_store import to_rag_document
from visual_rag.core.embedding.adapter import EmbeddingAdapter
from visual_rag.core.exceptions import (
    DocumentNotFoundError,
    StoreError,
    ValidationError,
    VisualRAGException,
)
from visual_rag.core.media import decode_image
from visual_rag.core.retrieval.schemas import RagDocument
from visual_rag.core.tagging import IndicatorExtractor, IndicatorMetadata, suggest_tags
from visual_rag.models.document import (
    MAX_BATCH_ENTRIES,
    BatchEntryResult,
    DocumentCreateRequest,
    DocumentUpdateRequest,
)

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_ICON_NAME_LENGTH = 200
MAX_ICON_DESCRIPTION_LENGTH = 1000
MAX_CONTENT_LENGTH = 10000
MIN_ESTIMATED_MINUTES = 1
MAX_ESTIMATED_MINUTES = 480


def _merge(*lists: list[str]) -> list[str]:
    merged: list[str] = []
    for values in lists:
        for value in values:
            text = value.strip()
            if text and text not in merged:
                merged.append(text)
    return merged


def _merge_tags(*lists: list[str]) -> list[str]:
    """Tags are stored lower-cased so array overlap lookups match any casing."""
    return _merge([value.lower() for values in lists for value in values])


def validate_fields(
    title: str | None,
    content: str | None,
    icon_name: str | None = None,
    icon_description: str | None = None,
    estimated_time_minutes: int | None = None,
    partial: bool = False,
) -> tuple[list[str], list[str]]:
    """
    Check document content rules.

    Args:
        partial: Update mode; None fields are skipped instead of required

    Returns:
        tuple[list[str], list[str]]: (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    if title is not None or not partial:
        if not (title or "").strip():
            errors.append("Title is required")
        elif len(title) > MAX_TITLE_LENGTH:
            errors.append(f"Title must be less than {MAX_TITLE_LENGTH} characters")
        elif len(title.strip()) < 3:
            warnings.append("Title is very short - consider being more descriptive")

    if content is not None or not partial:
        if not (content or "").strip():
            errors.append("Troubleshooting content is required")
        elif len(content) > MAX_CONTENT_LENGTH:
            errors.append("Troubleshooting content must be less than 10,000 characters")
        else:
            if len(content.strip()) < 20:
                warnings.append("Troubleshooting content is very short - consider adding more detailed steps")
            if "step" not in content.lower():
                warnings.append("Consider breaking down the solution into clear steps")

    if icon_name and len(icon_name) > MAX_ICON_NAME_LENGTH:
        errors.append(f"Icon name must be less than {MAX_ICON_NAME_LENGTH} characters")

    if icon_description:
        if len(icon_description) > MAX_ICON_DESCRIPTION_LENGTH:
            errors.append(f"Icon description must be less than {MAX_ICON_DESCRIPTION_LENGTH} characters")
        elif len(icon_description.strip()) < 10:
            warnings.append("Icon description is very short - consider adding more detail")

    if estimated_time_minutes is not None and not (
        MIN_ESTIMATED_MINUTES <= estimated_time_minutes <= MAX_ESTIMATED_MINUTES
    ):
        errors.append("Estimated time must be between 1 and 480 minutes")

    return errors, warnings


def _raise_if_errors(errors: list[str]) -> None:
    if errors:
        raise ValidationError("; ".join(errors), details={"errors": errors})


def _parse_id(document_id: str) -> UUID:
    try:
        return UUID(document_id)
    except (ValueError, TypeError) as e:
        raise DocumentNotFoundError(document_id) from e


class DocumentService:
    """Document service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        embedder: EmbeddingAdapter,
        indicator_extractor: IndicatorExtractor,
    ) -> None:
        self.db = db
        self.embedder = embedder
        self.indicator_extractor = indicator_extractor

    async def register(self, request: DocumentCreateRequest) -> tuple[RagDocument, list[str], list[str]]:
        """
        Validate, enrich and store one document.

        Args:
            request: Registration payload

        Returns:
            tuple: (stored document, validation warnings, suggested tags)

        Raises:
            ValidationError: Content rules or image checks failed (no external call made)
            ConfigurationError: Image given but Gemini is not configured
            UpstreamServiceError: Image embedding failed
            StoreError: Database failure
        """
        errors, warnings = validate_fields(
            request.title,
            request.content,
            request.icon_name,
            request.icon_description,
            request.estimated_time_minutes,
        )
        _raise_if_errors(errors)

        image: tuple[bytes, str] | None = None
        if request.image_base64:
            image = decode_image(request.image_base64, request.mime_type)

        logger.info(f"{__name__}:register - START title={request.title[:50]!r} has_image={image is not None}")

        embedding = await self.embedder.embed(*image) if image else None

        extracted = IndicatorMetadata()
        if request.auto_extract:
            extracted = await self.indicator_extractor.extract(
                request.icon_name, request.icon_description, request.content
            )
        suggested = suggest_tags(request.icon_name, request.icon_description, request.content)
        tags = _merge_tags(request.tags, extracted.tags, [] if extracted.tags else suggested)

        try:
            row = await rag_document_crud.create(
                self.db,
                title=request.title.strip(),
                content=request.content.strip(),
                icon_name=(request.icon_name or "").strip() or None,
                icon_description=(request.icon_description or "").strip() or None,
                category=(request.category or "general").strip().lower() or "general",
                subcategory=(request.subcategory or "").strip() or None,
                issue_type=request.issue_type or "general",
                severity_level=request.severity_level,
                urgency_level=request.urgency_level,
                difficulty_level=request.difficulty_level,
                estimated_time_minutes=request.estimated_time_minutes,
                tools_required=_merge(request.tools_required),
                safety_warnings=_merge(request.safety_warnings),
                visual_indicators=_merge(request.visual_indicators, extracted.visual_indicators),
                indicator_states=_merge(request.indicator_states, extracted.indicator_states),
                tags=tags,
                image_embedding=embedding,
                is_active=True,
                source=request.source or "manual",
                document_metadata=request.metadata,
            )
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:register - FAILED - {type(e).__name__}: {e}")
            raise StoreError("Database error while saving document", operation="register") from e

        logger.info(f"{__name__}:register - END id={row.id} tags={len(tags)}")
        return to_rag_document(row), warnings, suggested

    async def register_batch(self, entries: list[DocumentCreateRequest]) -> list[BatchEntryResult]:
        """
        Register up to 50 documents; each entry succeeds or fails on its own.

        Raises:
            ValidationError: Empty batch or more than 50 entries
        """
        if not entries:
            raise ValidationError("At least one entry is required", field="entries")
        if len(entries) > MAX_BATCH_ENTRIES:
            raise ValidationError(
                f"Batch size must be at most {MAX_BATCH_ENTRIES} entries",
                field="entries",
                details={"count": len(entries)},
            )

        results: list[BatchEntryResult] = []
        for index, entry in enumerate(entries):
            try:
                async with self.db.begin_nested():
                    document, warnings, _ = await self.register(entry)
                results.append(
                    BatchEntryResult(
                        index=index,
                        success=True,
                        document_id=document.id,
                        title=document.title,
                        warnings=warnings,
                    )
                )
            except VisualRAGException as e:
                logger.warning(f"{__name__}:register_batch - Entry {index} failed - {e.message}")
                results.append(BatchEntryResult(index=index, success=False, title=entry.title or None, error=e.message))
        return results

    async def update(self, document_id: str, request: DocumentUpdateRequest) -> RagDocument:
        """
        Apply a partial update; a new image is re-embedded.

        Raises:
            DocumentNotFoundError: Unknown id
            ValidationError: Content rules failed
        """
        doc_uuid = _parse_id(document_id)
        errors, _ = validate_fields(
            request.title,
            request.content,
            request.icon_name,
            request.icon_description,
            request.estimated_time_minutes,
            partial=True,
        )
        _raise_if_errors(errors)

        values = request.model_dump(
            exclude_unset=True,
            exclude_none=True,
            exclude={"image_base64", "mime_type", "metadata"},
        )
        if request.metadata is not None:
            values["document_metadata"] = request.metadata
        if "category" in values and values["category"]:
            values["category"] = values["category"].strip().lower()
        if "tags" in values:
            values["tags"] = _merge_tags(values["tags"])
        if request.image_base64:
            image_bytes, mime_type = decode_image(request.image_base64, request.mime_type)
            values["image_embedding"] = await self.embedder.embed(image_bytes, mime_type)

        if not values:
            raise ValidationError("No fields to update")

        try:
            row = await rag_document_crud.update_by_id(self.db, doc_uuid, **values)
        except SQLAlchemyError as e:
            raise StoreError("Database error while updating document", operation="update") from e
        if row is None:
            raise DocumentNotFoundError(document_id)
        logger.info(f"{__name__}:update - Updated id={document_id} fields={sorted(values)}")
        return to_rag_document(row)

    async def delete(self, document_id: str, hard: bool = False) -> None:
        """Soft delete (is_active=False) by default, row removal when hard."""
        doc_uuid = _parse_id(document_id)
        try:
            if hard:
                found = await rag_document_crud.delete_by_id(self.db, doc_uuid)
            else:
                found = await rag_document_crud.soft_delete(self.db, doc_uuid)
        except SQLAlchemyError as e:
            raise StoreError("Database error while deleting document", operation="delete") from e
        if not found:
            raise DocumentNotFoundError(document_id)
        logger.info(f"{__name__}:delete - Deleted id={document_id} hard={hard}")

    async def list_documents(
        self,
        category: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[RagDocument]:
        try:
            rows = await rag_document_crud.list_active(self.db, category=category, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            raise StoreError("Database error while listing documents", operation="list") from e
        return [to_rag_document(row) for row in rows]
