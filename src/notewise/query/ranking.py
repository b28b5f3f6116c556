"""Similarity ranking of notes against a query embedding."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DimensionMismatch(ValueError):
    """Raised when two embeddings have different lengths."""

    def __init__(self, expected: int, actual: int) -> None:
        """Initialize dimension error.

        Args:
            expected: Length of the query vector.
            actual: Length of the offending vector.
        """
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


@dataclass
class SimilarityPair(Generic[T]):
    """An item paired with its similarity to the query.

    Attributes:
        item: Ranked item (usually a Note)
        score: Cosine similarity in [-1, 1]
    """

    item: T
    score: float


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute dot(a, b) / (|a| * |b|).

    A zero-magnitude vector has similarity 0.0 with everything.

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))

    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    norm = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm == 0.0:
        return 0.0
    return float(np.dot(va, vb) / norm)


def score(
    query_vector: Sequence[float],
    items: Sequence[tuple[T, Sequence[float]]],
) -> list[SimilarityPair[T]]:
    """Score every item against the query, keeping input order.

    Raises:
        DimensionMismatch: If any item vector differs from the query length
    """
    return [
        SimilarityPair(item=item, score=cosine_similarity(query_vector, vector))
        for item, vector in items
    ]


def rank(
    query_vector: Sequence[float],
    items: Sequence[tuple[T, Sequence[float]]],
) -> list[T]:
    """Order items by descending cosine similarity to the query.

    The sort is stable, so exact ties keep their input order.

    Args:
        query_vector: Query embedding
        items: (item, embedding) pairs

    Returns:
        Items, most similar first

    Raises:
        DimensionMismatch: If any item vector differs from the query length
    """
    pairs = score(query_vector, items)
    pairs.sort(key=lambda pair: pair.score, reverse=True)

    if pairs:
        logger.debug(f"Ranked {len(pairs)} items, top score {pairs[0].score:.3f}")

    return [pair.item for pair in pairs]


__all__ = [
    "DimensionMismatch",
    "SimilarityPair",
    "cosine_similarity",
    "rank",
    "score",
]
