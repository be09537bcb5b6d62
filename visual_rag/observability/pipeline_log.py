"""
Analysis pipeline event log.

Each analysis request emits events at its stage boundaries
(analysis_started, context_extracted, documents_retrieved,
analysis_completed, analysis_failed). PipelineLogger fans every event out to
its sinks; a failing sink is logged and skipped so logging never breaks a
request. ErrorBuffer keeps a bounded, categorized record of recent errors
for the stats endpoint.

Dependencies: sqlalchemy (database sink), logging (stdlib)
System role: Append-only observability store for the analysis pipeline
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import async_sessionmaker

from visual_rag.boundary.db.CRUD.analysis_log_crud import analysis_log_crud
from visual_rag.core.exceptions import (
    ConfigurationError,
    SafetyBlockedError,
    StoreError,
    UpstreamServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class EventType:
    """Event type names written to analysis_logs.event_type."""

    ANALYSIS_STARTED = "analysis_started"
    CONTEXT_EXTRACTED = "context_extracted"
    EMBEDDING_FAILED = "embedding_failed"
    DOCUMENTS_RETRIEVED = "documents_retrieved"
    ANALYSIS_COMPLETED = "analysis_completed"
    ANALYSIS_FAILED = "analysis_failed"
    CHAT_COMPLETED = "chat_completed"
    CHAT_FAILED = "chat_failed"


@dataclass
class PipelineEvent:
    """A single stage-boundary event of one analysis request."""

    session_id: str
    event_type: str
    data: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None
    processing_time_ms: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventSink(Protocol):
    """Destination for pipeline events."""

    async def write(self, event: PipelineEvent) -> None: ...


class BoundedEventBuffer:
    """In-memory sink keeping the most recent events; oldest are evicted."""

    def __init__(self, maxlen: int = 1000) -> None:
        self._events: deque[PipelineEvent] = deque(maxlen=maxlen)

    async def write(self, event: PipelineEvent) -> None:
        self._events.append(event)

    def recent(self, limit: int | None = None) -> list[PipelineEvent]:
        events = list(self._events)
        return events if limit is None else events[-limit:]

    def for_session(self, session_id: str) -> list[PipelineEvent]:
        return [event for event in self._events if event.session_id == session_id]

    def __len__(self) -> int:
        return len(self._events)


class DatabaseEventSink:
    """
    Sink writing events to the analysis_logs table.

    Uses its own short-lived session per event so that a failed request
    transaction never takes its log rows down with it.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def write(self, event: PipelineEvent) -> None:
        async with self._session_factory() as session:
            await analysis_log_crud.create(
                session,
                session_id=event.session_id,
                event_type=event.event_type,
                timestamp=event.timestamp,
                analysis_data=event.data,
                error_message=event.error_message,
                processing_time_ms=event.processing_time_ms,
            )
            await session.commit()


class PipelineLogger:
    """
    Fan-out logger for pipeline events.

    Injected into the analysis service; tests pass a logger with a single
    BoundedEventBuffer and read the events back.
    """

    def __init__(self, sinks: list[EventSink] | None = None) -> None:
        self.sinks: list[EventSink] = list(sinks or [])

    async def log(
        self,
        session_id: str,
        event_type: str,
        data: dict[str, Any] | None = None,
        error_message: str | None = None,
        processing_time_ms: int | None = None,
    ) -> PipelineEvent:
        """
        Record one event on every sink.

        Args:
            session_id: Analysis session key
            event_type: One of the EventType names
            data: JSON-serializable payload
            error_message: Failure description for analysis_failed events
            processing_time_ms: Elapsed time since the request started

        Returns:
            PipelineEvent: The recorded event
        """
        event = PipelineEvent(
            session_id=session_id,
            event_type=event_type,
            data=data or {},
            error_message=error_message,
            processing_time_ms=processing_time_ms,
        )
        logger.debug(f"{__name__}:log - {event_type} session_id={session_id}")
        for sink in self.sinks:
            try:
                await sink.write(event)
            except Exception as e:
                logger.warning(
                    f"{__name__}:log - Sink {type(sink).__name__} failed for {event_type} - "
                    f"{type(e).__name__}: {e}"
                )
        return event


class ErrorCategory:
    """Error categories tracked by ErrorBuffer."""

    NETWORK = "network"
    API = "api"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    STORE = "store"
    SAFETY = "safety"
    UNKNOWN = "unknown"


@dataclass
class ErrorEntry:
    """A single categorized error."""

    category: str
    message: str
    location: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "message": self.message,
            "location": self.location,
            "metadata": self.metadata,
            "timestamp": self.timestamp.isoformat(),
        }


def categorize_error(error: BaseException) -> str:
    """
    Assign an error category, by exception type first and message second.

    Args:
        error: The exception to classify

    Returns:
        str: One of the ErrorCategory values
    """
    if isinstance(error, SafetyBlockedError):
        return ErrorCategory.SAFETY
    if isinstance(error, ValidationError):
        return ErrorCategory.VALIDATION
    if isinstance(error, ConfigurationError):
        return ErrorCategory.CONFIGURATION
    if isinstance(error, StoreError):
        return ErrorCategory.STORE
    if isinstance(error, UpstreamServiceError):
        return ErrorCategory.API

    message = str(error).lower()
    if "network" in message or "connect" in message or "timeout" in message:
        return ErrorCategory.NETWORK
    if "api" in message or "http" in message:
        return ErrorCategory.API
    if "validation" in message or "invalid" in message:
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


class ErrorBuffer:
    """Bounded buffer of recent categorized errors with a monotonic total."""

    def __init__(self, maxlen: int = 1000) -> None:
        self._entries: deque[ErrorEntry] = deque(maxlen=maxlen)
        self.total_recorded = 0

    def record(
        self,
        error: BaseException,
        location: str,
        metadata: dict[str, Any] | None = None,
    ) -> ErrorEntry:
        entry = ErrorEntry(
            category=categorize_error(error),
            message=getattr(error, "message", None) or str(error),
            location=location,
            metadata=metadata or {},
        )
        self._entries.append(entry)
        self.total_recorded += 1
        logger.warning(f"{__name__}:record - [{entry.category}] {location}: {entry.message}")
        return entry

    def entries(self) -> list[ErrorEntry]:
        return list(self._entries)

    def stats(self, now: datetime | None = None) -> dict[str, Any]:
        """Summary for the stats endpoint: totals, last hour, per category, 5 most recent."""
        now = now or datetime.now(timezone.utc)
        one_hour_ago = now - timedelta(hours=1)
        entries = list(self._entries)
        return {
            "total": self.total_recorded,
            "buffered": len(entries),
            "last_hour": sum(1 for entry in entries if entry.timestamp > one_hour_ago),
            "by_type": dict(Counter(entry.category for entry in entries)),
            "recent": [entry.to_dict() for entry in entries[-5:]],
        }

    def clear(self) -> None:
        self._entries.clear()
