"""
Analysis log ORM model.

Append-only pipeline events written by the database event sink.

Dependencies: sqlalchemy, visual_rag.boundary.db.base
System role: Persistent pipeline event log
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from visual_rag.boundary.db.base import Base, UUIDMixin


class AnalysisLogModel(Base, UUIDMixin):
    """
    One pipeline event.

    Attributes:
        session_id: Analysis session key
        event_type: analysis_started, context_extracted, ...
        timestamp: Event time (UTC)
        analysis_data: JSON payload of the stage
        error_message: Failure description, if any
        processing_time_ms: Elapsed time since the request started
    """

    __tablename__ = "analysis_logs"

    session_id: Mapped[str] = mapped_column(String(200), nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    analysis_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    processing_time_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_analysis_logs_session_id", "session_id"),
        Index("idx_analysis_logs_timestamp", "timestamp"),
        Index("idx_analysis_logs_event_type", "event_type"),
    )
