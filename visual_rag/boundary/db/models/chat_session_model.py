"""
Chat session ORM model.

Stores the ordered chat turns of one analysis session under the caller's
session key.

Dependencies: sqlalchemy, visual_rag.boundary.db.base
System role: Session persistence for multi-turn analysis
"""

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from visual_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ChatSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Analysis session with its chat turns.

    Attributes:
        id: UUID primary key (auto-generated)
        session_key: Caller-supplied session id (unique)
        turns: JSON list of {role, text, image_ref, metadata, timestamp}
        created_at: Creation timestamp (UTC)
        updated_at: Last append timestamp (UTC)
    """

    __tablename__ = "chat_sessions"

    session_key: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    turns: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
