"""
Document retriever.

Runs the three strategies against a DocumentStore and merges their scores:
  1. Vector: pgvector similarity search on the image embedding
  2. Keyword/category: category and text-search candidates scored by
     keyword hits and category matches
  3. Urgency: safety-tagged documents boosted for urgent contexts

A strategy whose store query fails contributes nothing; the others still
run. An empty result is a valid answer.

Dependencies: visual_rag.configs, visual_rag.core.retrieval.scoring
System role: Second stage of the analysis pipeline
"""

import logging
from typing import Protocol

from visual_rag.configs.retrieval import RetrievalSettings
from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.core.retrieval.schemas import RagDocument, RetrievalResult
from visual_rag.core.retrieval.scoring import (
    URGENT_CONTEXT_LEVELS,
    URGENT_TAGS,
    ScoreComponent,
    keyword_components,
    merge_components,
    urgency_components,
    vector_components,
)

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Read-side queries the retriever needs; only active documents are returned."""

    async def search_similar(
        self,
        embedding: list[float],
        threshold: float,
        match_count: int,
        category: str | None = None,
    ) -> list[tuple[RagDocument, float]]: ...

    async def find_by_categories(self, categories: list[str], limit: int) -> list[RagDocument]: ...

    async def search_text(self, keywords: list[str], limit: int) -> list[RagDocument]: ...

    async def find_by_tags(self, tags: list[str], limit: int) -> list[RagDocument]: ...


class DocumentRetriever:
    """Hybrid retriever over a DocumentStore."""

    def __init__(self, store: DocumentStore, settings: RetrievalSettings) -> None:
        self.store = store
        self.settings = settings

    async def retrieve(
        self,
        context: ExtractedContext,
        embedding: list[float] | None = None,
        category_filter: str | None = None,
    ) -> list[RetrievalResult]:
        """
        Rank documents for a context.

        Args:
            context: Extracted image context
            embedding: Query embedding; the vector strategy is skipped when None
            category_filter: Exact category restriction for the vector strategy

        Returns:
            list[RetrievalResult]: At most top_k results, best first
        """
        logger.info(
            f"{__name__}:retrieve - START category={context.primary_category} "
            f"urgency={context.urgency_level} has_embedding={embedding is not None}"
        )
        documents: dict[str, RagDocument] = {}

        vector = await self._vector_strategy(embedding, category_filter, documents)
        keyword = await self._keyword_strategy(context, documents)
        urgency = await self._urgency_strategy(context, documents)

        merged = merge_components([vector, keyword, urgency], self.settings.top_k)
        results = [
            RetrievalResult(
                document=documents[score.document_id],
                similarity=score.similarity,
                relevance_score=round(score.total, 6),
            )
            for score in merged
        ]
        logger.info(
            f"{__name__}:retrieve - END vector={len(vector)} keyword={len(keyword)} "
            f"urgency={len(urgency)} results={len(results)}"
        )
        return results

    async def _vector_strategy(
        self,
        embedding: list[float] | None,
        category_filter: str | None,
        documents: dict[str, RagDocument],
    ) -> list[ScoreComponent]:
        if embedding is None:
            return []
        try:
            matches = await self.store.search_similar(
                embedding,
                self.settings.similarity_threshold,
                self.settings.vector_match_count,
                category_filter,
            )
        except Exception as e:
            logger.warning(f"{__name__}:_vector_strategy - Store query failed - {type(e).__name__}: {e}")
            return []
        for document, _ in matches:
            documents.setdefault(document.id, document)
        return vector_components(matches, self.settings)

    async def _keyword_strategy(
        self,
        context: ExtractedContext,
        documents: dict[str, RagDocument],
    ) -> list[ScoreComponent]:
        categories: list[str] = []
        for category in [context.primary_category, *context.secondary_categories]:
            if category != "general" and category not in categories:
                categories.append(category)
        keywords = context.search_keywords()[: self.settings.text_search_keyword_limit]

        candidates: dict[str, RagDocument] = {}
        if categories:
            try:
                for document in await self.store.find_by_categories(categories, self.settings.candidate_limit):
                    candidates.setdefault(document.id, document)
            except Exception as e:
                logger.warning(f"{__name__}:_keyword_strategy - Category query failed - {type(e).__name__}: {e}")
        if keywords:
            try:
                for document in await self.store.search_text(keywords, self.settings.candidate_limit):
                    candidates.setdefault(document.id, document)
            except Exception as e:
                logger.warning(f"{__name__}:_keyword_strategy - Text search failed - {type(e).__name__}: {e}")

        for doc_id, document in candidates.items():
            documents.setdefault(doc_id, document)
        return keyword_components(context, list(candidates.values()), self.settings)

    async def _urgency_strategy(
        self,
        context: ExtractedContext,
        documents: dict[str, RagDocument],
    ) -> list[ScoreComponent]:
        if context.urgency_level not in URGENT_CONTEXT_LEVELS:
            return []
        try:
            candidates = await self.store.find_by_tags(list(URGENT_TAGS), self.settings.urgent_fetch_count)
        except Exception as e:
            logger.warning(f"{__name__}:_urgency_strategy - Tag query failed - {type(e).__name__}: {e}")
            return []
        for document in candidates:
            documents.setdefault(document.id, document)
        return urgency_components(context, candidates, self.settings)
