"""
Embedding adapter: image bytes to a fixed-width, finite vector.
"""

from visual_rag.core.embedding.adapter import EmbeddingAdapter, normalize_dimensions

__all__ = ["EmbeddingAdapter", "normalize_dimensions"]
