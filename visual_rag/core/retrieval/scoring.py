"""
Retrieval scoring.

Each strategy turns store results into ScoreComponents; merge_components
combines them: the maximum over similarity components plus the sum of bonus
components. All functions here are pure.

Dependencies: None
System role: Deterministic ranking for the document retriever
"""

from dataclasses import dataclass
from typing import Literal

from visual_rag.configs.retrieval import RetrievalSettings
from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.core.retrieval.schemas import RagDocument

URGENT_CONTEXT_LEVELS = frozenset({"high", "critical"})
URGENT_TAGS: tuple[str, ...] = ("safety", "urgent", "critical", "warning")


@dataclass(frozen=True)
class ScoreComponent:
    """
    One strategy's contribution for one document.

    kind "similarity" components are combined with max, "bonus" with sum.
    raw_similarity keeps the unweighted cosine similarity for reporting.
    """

    document_id: str
    value: float
    kind: Literal["similarity", "bonus"]
    raw_similarity: float | None = None


@dataclass(frozen=True)
class MergedScore:
    document_id: str
    similarity: float | None
    total: float


def vector_components(
    matches: list[tuple[RagDocument, float]],
    settings: RetrievalSettings,
) -> list[ScoreComponent]:
    """similarity x vector_weight for every vector match."""
    return [
        ScoreComponent(
            document_id=document.id,
            value=similarity * settings.vector_weight,
            kind="similarity",
            raw_similarity=similarity,
        )
        for document, similarity in matches
    ]


def keyword_components(
    context: ExtractedContext,
    candidates: list[RagDocument],
    settings: RetrievalSettings,
) -> list[ScoreComponent]:
    """
    Keyword and category bonuses for candidate documents.

    keyword_increment per search keyword found in title, content or tags;
    primary_category_bonus for an exact primary match and
    secondary_category_bonus for a secondary match. Zero scores are dropped.
    """
    keywords = context.search_keywords()
    primary = context.primary_category.lower()
    secondary = {category.lower() for category in context.secondary_categories}

    components: list[ScoreComponent] = []
    for document in candidates:
        text = document.searchable_text()
        score = settings.keyword_increment * sum(1 for keyword in keywords if keyword in text)
        category = document.category.lower()
        if category == primary:
            score += settings.primary_category_bonus
        elif category in secondary:
            score += settings.secondary_category_bonus
        if score > 0:
            components.append(ScoreComponent(document_id=document.id, value=score, kind="bonus"))
    return components


def urgency_components(
    context: ExtractedContext,
    candidates: list[RagDocument],
    settings: RetrievalSettings,
) -> list[ScoreComponent]:
    """urgency_bonus for safety-tagged documents when the context is high or critical."""
    if context.urgency_level not in URGENT_CONTEXT_LEVELS:
        return []
    components = []
    for document in candidates:
        tags = {tag.lower() for tag in document.tags}
        if tags.intersection(URGENT_TAGS):
            components.append(
                ScoreComponent(document_id=document.id, value=settings.urgency_bonus, kind="bonus")
            )
    return components


def merge_components(
    strategies: list[list[ScoreComponent]],
    top_k: int,
) -> list[MergedScore]:
    """
    Merge strategy outputs into a ranked list.

    total = max(similarity components, default 0) + sum(bonus components).
    Ordered by total descending; ties keep first-appearance order across the
    strategies in the order given. At most top_k entries.

    Args:
        strategies: Component lists, in strategy order
        top_k: Maximum results

    Returns:
        list[MergedScore]: Ranked merged scores
    """
    order: list[str] = []
    best: dict[str, float] = {}
    raw: dict[str, float] = {}
    bonus: dict[str, float] = {}

    for components in strategies:
        for component in components:
            doc_id = component.document_id
            if doc_id not in best and doc_id not in bonus:
                order.append(doc_id)
            if component.kind == "similarity":
                if doc_id not in best or component.value > best[doc_id]:
                    best[doc_id] = component.value
                    if component.raw_similarity is not None:
                        raw[doc_id] = component.raw_similarity
            else:
                bonus[doc_id] = bonus.get(doc_id, 0.0) + component.value

    merged = [
        MergedScore(
            document_id=doc_id,
            similarity=raw.get(doc_id),
            total=best.get(doc_id, 0.0) + bonus.get(doc_id, 0.0),
        )
        for doc_id in order
    ]
    ranked = sorted(merged, key=lambda score: score.total, reverse=True)
    return ranked[:top_k]
