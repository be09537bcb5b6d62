"""
Database table creation script.

Enables the pgvector extension, creates all tables defined in ORM models
and seeds the default issue categories and analysis prompts.

Dependencies: sqlalchemy, pgvector, visual_rag.configs
System role: Database schema initialization

Usage:
    python -m visual_rag.boundary.db.create_tables
"""

import logging

from sqlalchemy import select, text
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from visual_rag.boundary.db.base import Base
from visual_rag.boundary.db.connection import get_engine
from visual_rag.core.synthesis.default_prompts import DEFAULT_PROMPT_PRIORITIES, DEFAULT_PROMPTS

# Import all models to register them with Base.metadata
from visual_rag.boundary.db.models import (  # noqa: F401
    AnalysisLogModel,
    AnalysisPromptModel,
    ChatSessionModel,
    IssueCategoryModel,
    RagDocumentModel,
)

logger = logging.getLogger(__name__)

# (name, display_name, description, icon_name, color_code, sort_order)
DEFAULT_CATEGORIES: list[tuple[str, str, str, str, str, int]] = [
    ("general", "General", "General troubleshooting and maintenance", "settings", "#6B7280", 0),
    ("electrical", "Electrical", "Electrical systems and components", "zap", "#EF4444", 10),
    ("mechanical", "Mechanical", "Mechanical parts and assemblies", "cog", "#3B82F6", 20),
    ("electronic", "Electronic", "Electronic controls and displays", "cpu", "#8B5CF6", 30),
    ("safety", "Safety", "Safety systems and warnings", "shield", "#F59E0B", 40),
    ("maintenance", "Maintenance", "Routine maintenance and care", "wrench", "#10B981", 50),
    ("performance", "Performance", "Performance issues and optimization", "trending-up", "#06B6D4", 60),
    ("connectivity", "Connectivity", "Network and communication issues", "wifi", "#84CC16", 70),
]


def seed_defaults(session: Session) -> None:
    """Insert default categories and prompts that are not present yet."""
    for name, display_name, description, icon_name, color_code, sort_order in DEFAULT_CATEGORIES:
        session.execute(
            insert(IssueCategoryModel)
            .values(
                name=name,
                display_name=display_name,
                description=description,
                icon_name=icon_name,
                color_code=color_code,
                sort_order=sort_order,
                is_active=True,
                category_metadata={},
            )
            .on_conflict_do_nothing(index_elements=["name"])
        )

    existing_focus = set(session.scalars(select(AnalysisPromptModel.analysis_focus)).all())
    for focus, prompt in DEFAULT_PROMPTS.items():
        if focus in existing_focus:
            continue
        session.add(
            AnalysisPromptModel(
                name=prompt["name"],
                prompt_text=prompt["prompt_text"],
                description=prompt["description"],
                prompt_type="analysis",
                analysis_focus=focus,
                category="general",
                is_active=True,
                priority=DEFAULT_PROMPT_PRIORITIES.get(focus, 0),
                prompt_metadata={},
            )
        )


def create_all_tables() -> None:
    """
    Create the schema and seed defaults.

    Idempotent: the extension and tables use IF NOT EXISTS semantics and
    seeding skips rows that already exist.

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = get_engine()

    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    logger.info(f"{__name__}:create_all_tables - pgvector extension ready")

    Base.metadata.create_all(bind=engine)
    logger.info(f"{__name__}:create_all_tables - Tables created")

    with Session(engine) as session, session.begin():
        seed_defaults(session)
    logger.info(f"{__name__}:create_all_tables - Default categories and prompts seeded")


def drop_all_tables() -> None:
    """
    Drop all tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.info(f"{__name__}:drop_all_tables - All tables dropped")


if __name__ == "__main__":
    from visual_rag.observability.logger import configure_logging

    configure_logging()
    create_all_tables()
