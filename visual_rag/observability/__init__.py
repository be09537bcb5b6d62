"""
Observability module.

Provides structured logging, correlation ID tracking, request middleware
and the analysis pipeline event log.
"""

from visual_rag.observability.pipeline_log import (
    BoundedEventBuffer,
    ErrorBuffer,
    PipelineEvent,
    PipelineLogger,
)

__all__ = ["BoundedEventBuffer", "ErrorBuffer", "PipelineEvent", "PipelineLogger"]
