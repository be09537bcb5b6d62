"""
Shared test fixtures and configuration for entire test suite.

Provides: Settings, a mock AsyncSession with savepoint support, document
factories, an in-memory document store, a sample image payload, the app
and a TestClient
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

import base64
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.configs.gemini import GeminiSettings
from visual_rag.configs.retrieval import RetrievalSettings
from visual_rag.configs.speech import SpeechSettings
from visual_rag.core.retrieval.schemas import RagDocument

# Smallest valid PNG header; content is never decoded as an image
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode()


class Savepoint:
    """Stand-in for AsyncSession.begin_nested() used as an async context manager."""

    def __init__(self) -> None:
        self.rolled_back = False

    async def __aenter__(self) -> "Savepoint":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.rolled_back = exc_type is not None
        return False


class InMemoryDocumentStore:
    """
    DocumentStore over a list of documents.

    search_similar returns the configured (document, similarity) pairs;
    fail_on names methods that raise to simulate store failures.
    """

    def __init__(
        self,
        documents: list[RagDocument] | None = None,
        similar: list[tuple[RagDocument, float]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.documents = documents or []
        self.similar = similar or []
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} unavailable")

    async def search_similar(self, embedding, threshold, match_count, category=None):
        self._check("search_similar")
        matches = [(d, s) for d, s in self.similar if s > threshold]
        if category:
            matches = [(d, s) for d, s in matches if d.category == category]
        return sorted(matches, key=lambda m: m[1], reverse=True)[:match_count]

    async def find_by_categories(self, categories, limit):
        self._check("find_by_categories")
        return [d for d in self.documents if d.category in categories][:limit]

    async def search_text(self, keywords, limit):
        self._check("search_text")
        return [
            d for d in self.documents
            if any(k in f"{d.title} {d.content}".lower() for k in keywords)
        ][:limit]

    async def find_by_tags(self, tags, limit):
        self._check("find_by_tags")
        return [d for d in self.documents if set(d.tags).intersection(tags)][:limit]


def make_document(**overrides) -> RagDocument:
    """RagDocument with permissive defaults; pass fields to override."""
    values = {
        "id": str(uuid.uuid4()),
        "title": "Blinking red power LED",
        "content": "Step 1: unplug the unit. Step 2: check the fuse.",
        "category": "electrical",
        "tags": [],
    }
    values.update(overrides)
    return RagDocument(**values)


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    return GeminiSettings(
        api_key="test-key",
        embedding_dimensions=8,
        embedding_max_attempts=3,
        embedding_backoff_base=0.5,
        embedding_backoff_max=8.0,
    )


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    return RetrievalSettings()


@pytest.fixture
def speech_settings() -> SpeechSettings:
    return SpeechSettings(api_key="tts-key")


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Mock AsyncSession.

    begin_nested() returns a fresh Savepoint so services can use
    `async with db.begin_nested()`.
    """
    db = MagicMock(spec=AsyncSession)
    db.begin_nested = MagicMock(side_effect=lambda: Savepoint())
    db.execute = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.delete = AsyncMock()
    return db


@pytest.fixture
def png_base64() -> str:
    return PNG_BASE64


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def store_factory():
    return InMemoryDocumentStore


@pytest.fixture
def app():
    """Fresh application; lifespan does not run because clients are not entered."""
    from visual_rag.main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
