"""
Catalog service.

Read-only views over the document store: category listing (defined plus
auto-detected), analysis prompts and usage statistics.

Dependencies: sqlalchemy, visual_rag.boundary.db.CRUD, visual_rag.observability
System role: Catalog and statistics use cases
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.analysis_log_crud import analysis_log_crud
from visual_rag.boundary.db.CRUD.analysis_prompt_crud import analysis_prompt_crud
from visual_rag.boundary.db.CRUD.issue_category_crud import issue_category_crud
from visual_rag.boundary.db.CRUD.rag_document_crud import rag_document_crud
from visual_rag.core.exceptions import StoreError
from visual_rag.core.synthesis.default_prompts import DEFAULT_PROMPT_PRIORITIES, DEFAULT_PROMPTS
from visual_rag.models.catalog import CategoryOut, DocumentStats, PromptOut, StatsResponse
from visual_rag.observability.pipeline_log import BoundedEventBuffer, ErrorBuffer

logger = logging.getLogger(__name__)

AUTO_CATEGORY_ICON = "folder"
AUTO_CATEGORY_COLOR = "#6B7280"
STATS_WINDOW_DAYS = 30

# Column -> label used when the stored value is NULL
_STAT_COLUMNS = {
    "category": "general",
    "issue_type": "general",
    "severity_level": "medium",
    "difficulty_level": "intermediate",
}


def auto_category_label(name: str) -> str:
    """electrical_panel -> Electrical panel"""
    return name.replace("_", " ").capitalize()


def _with_defaults(counts: dict[str | None, int], default: str) -> dict[str, int]:
    merged: dict[str, int] = {}
    for value, count in counts.items():
        key = value or default
        merged[key] = merged.get(key, 0) + count
    return merged


class CatalogService:
    """Catalog service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        error_buffer: ErrorBuffer,
        event_buffer: BoundedEventBuffer,
    ) -> None:
        self.db = db
        self.error_buffer = error_buffer
        self.event_buffer = event_buffer

    async def list_categories(self) -> list[CategoryOut]:
        """
        Defined categories plus categories only seen on documents.

        Returns:
            list[CategoryOut]: Sorted by document count, descending
        """
        try:
            defined = await issue_category_crud.list_active(self.db)
            counts = _with_defaults(await rag_document_crud.count_by(self.db, "category"), "general")
        except SQLAlchemyError as e:
            raise StoreError("Database error while listing categories", operation="list_categories") from e

        categories = [
            CategoryOut(
                name=row.name,
                display_name=row.display_name,
                description=row.description,
                icon=row.icon_name,
                color=row.color_code,
                count=counts.get(row.name, 0),
                parent_category=row.parent_category,
                is_defined=True,
                sort_order=row.sort_order,
                metadata=dict(row.category_metadata or {}),
            )
            for row in defined
        ]
        known = {row.name for row in defined}
        for name, count in counts.items():
            if name in known:
                continue
            categories.append(
                CategoryOut(
                    name=name,
                    display_name=auto_category_label(name),
                    description=f"Auto-detected category: {name}",
                    icon=AUTO_CATEGORY_ICON,
                    color=AUTO_CATEGORY_COLOR,
                    count=count,
                    is_defined=False,
                    sort_order=len(categories),
                )
            )

        categories.sort(key=lambda c: c.count, reverse=True)
        logger.info(f"{__name__}:list_categories - defined={len(known)} total={len(categories)}")
        return categories

    async def list_prompts(self) -> list[PromptOut]:
        """Active prompts; the built-in set when the table is empty."""
        try:
            rows = await analysis_prompt_crud.list_active(self.db)
        except SQLAlchemyError as e:
            raise StoreError("Database error while listing prompts", operation="list_prompts") from e

        if rows:
            return [
                PromptOut(
                    id=str(row.id),
                    name=row.name,
                    prompt_text=row.prompt_text,
                    description=row.description,
                    prompt_type=row.prompt_type,
                    analysis_focus=row.analysis_focus,
                    category=row.category,
                    priority=row.priority,
                )
                for row in rows
            ]

        logger.info(f"{__name__}:list_prompts - No stored prompts, returning built-in set")
        defaults = [
            PromptOut(
                id=f"default-{focus}",
                name=entry["name"],
                prompt_text=entry["prompt_text"],
                description=entry["description"],
                prompt_type="analysis",
                analysis_focus=focus,
                category="general",
                priority=DEFAULT_PROMPT_PRIORITIES.get(focus, 0),
            )
            for focus, entry in DEFAULT_PROMPTS.items()
        ]
        defaults.sort(key=lambda p: (-p.priority, p.analysis_focus))
        return defaults

    async def get_stats(self, now: datetime | None = None) -> StatsResponse:
        """
        Document counts, recent pipeline activity and error buffer stats.

        Args:
            now: Reference time (tests pin it)
        """
        now = now or datetime.now(timezone.utc)
        try:
            total = await rag_document_crud.count_active(self.db)
            grouped = {
                column: _with_defaults(await rag_document_crud.count_by(self.db, column), default)
                for column, default in _STAT_COLUMNS.items()
            }
            interactions = await analysis_log_crud.count_by_event_type_since(
                self.db, now - timedelta(days=STATS_WINDOW_DAYS)
            )
        except SQLAlchemyError as e:
            raise StoreError("Database error while computing stats", operation="stats") from e

        return StatsResponse(
            documents=DocumentStats(
                total=total,
                by_category=grouped["category"],
                by_issue_type=grouped["issue_type"],
                by_severity=grouped["severity_level"],
                by_difficulty=grouped["difficulty_level"],
            ),
            interactions_last_30_days=interactions,
            errors=self.error_buffer.stats(now),
            recent_events=len(self.event_buffer),
        )
