"""Deterministic local fallbacks for note enrichment.

Used whenever the generation service is unavailable or returns something
unusable. Each function is pure.
"""

import re
from enum import Enum

from ..notes.categorizer import categorize
from ..notes.models import Category


class SummaryLength(Enum):
    """Summary length tiers."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Sentiment(Enum):
    """Sentiment labels."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


SUMMARY_WORD_LIMITS: dict[SummaryLength, int] = {
    SummaryLength.SHORT: 10,
    SummaryLength.MEDIUM: 20,
    SummaryLength.LONG: 30,
}

POSITIVE_WORDS = frozenset(["good", "great", "excellent", "amazing", "wonderful", "happy"])
NEGATIVE_WORDS = frozenset(["bad", "poor", "terrible", "awful", "sad", "angry"])

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_BULLET_PREFIX = re.compile(r"^\s*(?:[•\-\*]\s*|\d+[.)]\s+)")
_WORD = re.compile(r"[a-z']+")


def fallback_summary(text: str, length: SummaryLength) -> str:
    """Take the first N words, appending "..." when the text is longer."""
    words = text.split()
    limit = min(SUMMARY_WORD_LIMITS[length], len(words))
    summary = " ".join(words[:limit])
    if len(words) > limit:
        summary += "..."
    return summary


def fallback_key_points(text: str) -> str:
    """First three sentences, one per line."""
    sentences = [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    return "\n".join(sentences[:3])


def clean_key_points(text: str) -> list[str]:
    """Split lines, strip bullet or number markers, drop empty lines."""
    points = []
    for line in text.splitlines():
        point = _BULLET_PREFIX.sub("", line).strip()
        if point:
            points.append(point)
    return points


def fallback_sentiment(text: str) -> Sentiment:
    """Compare counts of known positive and negative words; ties are neutral."""
    words = _WORD.findall(text.lower())
    positive = sum(1 for word in words if word in POSITIVE_WORDS)
    negative = sum(1 for word in words if word in NEGATIVE_WORDS)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def parse_sentiment(text: str) -> Sentiment | None:
    """Read a model reply as a sentiment label.

    Accepts the bare label with surrounding whitespace or punctuation
    ("Positive." or " negative\\n"). Anything else is None.
    """
    label = text.lower().strip().strip(".!\"'*` ")
    try:
        return Sentiment(label)
    except ValueError:
        return None


def fallback_categories(text: str) -> list[Category]:
    """Keyword categorization; [OTHER] when nothing matches."""
    return categorize(text)


__all__ = [
    "NEGATIVE_WORDS",
    "POSITIVE_WORDS",
    "SUMMARY_WORD_LIMITS",
    "Sentiment",
    "SummaryLength",
    "clean_key_points",
    "fallback_categories",
    "fallback_key_points",
    "fallback_sentiment",
    "fallback_summary",
    "parse_sentiment",
]
