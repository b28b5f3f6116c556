"""Query resolution module for notewise.

Provides date parsing, similarity ranking and tiered query resolution.
"""

from .dates import DateReference, DateReferenceParser, parse_date_reference
from .ranking import DimensionMismatch, SimilarityPair, cosine_similarity, rank
from .resolver import (
    QueryResolver,
    QueryResult,
    SearchTier,
    date_filter,
    keyword_filter,
    notes_fingerprint,
)

__all__ = [
    "DateReference",
    "DateReferenceParser",
    "DimensionMismatch",
    "QueryResolver",
    "QueryResult",
    "SearchTier",
    "SimilarityPair",
    "cosine_similarity",
    "date_filter",
    "keyword_filter",
    "notes_fingerprint",
    "parse_date_reference",
    "rank",
]
