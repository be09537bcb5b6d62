"""
Issue category ORM model.

Defined categories shown in the UI; documents may also use categories that
have no row here (auto-detected in listings).

Dependencies: sqlalchemy, visual_rag.boundary.db.base
System role: Category catalog
"""

from sqlalchemy import Boolean, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from visual_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class IssueCategoryModel(Base, UUIDMixin, TimestampMixin):
    """
    Issue category definition.

    Attributes:
        name: Category key matched against rag_documents.category (unique)
        display_name: Human-readable label
        description: Short explanation
        parent_category: Optional parent key
        icon_name: UI icon identifier
        color_code: Hex colour used by the UI
        is_active: Hidden from listings when False
        sort_order: Listing order for defined categories
        category_metadata: Free-form JSON (stored in the "metadata" column)
    """

    __tablename__ = "issue_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    icon_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    color_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
