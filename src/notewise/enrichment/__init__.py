"""Note enrichment module for notewise.

Provides summaries, key points, sentiment and category suggestions with
local fallbacks.
"""

from .fallbacks import (
    Sentiment,
    SummaryLength,
    clean_key_points,
    fallback_categories,
    fallback_key_points,
    fallback_sentiment,
    fallback_summary,
    parse_sentiment,
)
from .service import NoteAnnotations, NoteEnricher

__all__ = [
    "NoteAnnotations",
    "NoteEnricher",
    "Sentiment",
    "SummaryLength",
    "clean_key_points",
    "fallback_categories",
    "fallback_key_points",
    "fallback_sentiment",
    "fallback_summary",
    "parse_sentiment",
]
