"""Note enrichment: summary, key points, sentiment and categories.

Every operation checks the shared cache, then asks the generation service,
then falls back to a local heuristic. Results are normalized and cached
whichever path produced them.
"""

import logging
from dataclasses import dataclass

from ..cache import ResultCache, cache_key
from ..generation import (
    GenerationClient,
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    ModelKind,
    attempt_generation,
)
from ..notes.categorizer import parse_category_labels
from ..notes.models import Category
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
from .prompts import (
    CATEGORIES_PROMPT,
    KEY_POINTS_PROMPT,
    SENTIMENT_PROMPT,
    build_summary_prompt,
)

logger = logging.getLogger(__name__)


@dataclass
class NoteAnnotations:
    """All derived annotations for one note body.

    Attributes:
        summary: Medium-length summary
        key_points: Extracted key points
        sentiment: Overall sentiment
        categories: Suggested categories
    """

    summary: str
    key_points: list[str]
    sentiment: Sentiment
    categories: list[Category]


class NoteEnricher:
    """Derives annotations for note text.

    Stateless apart from the injected cache and generation client; never
    mutates notes.
    """

    def __init__(
        self,
        client: GenerationClient,
        cache: ResultCache,
        options: GenerationOptions | None = None,
    ) -> None:
        """Initialize enricher.

        Args:
            client: Generation client
            cache: Shared result cache
            options: Sampling options for enrichment prompts
        """
        self._client = client
        self._cache = cache
        self._options = options or GenerationOptions(temperature=0.3, max_tokens=150)

    def summarize(self, text: str, length: SummaryLength | str = SummaryLength.MEDIUM) -> str:
        """Summarize text.

        Args:
            text: Note body
            length: "short", "medium" or "long"

        Returns:
            Summary text ("" for blank input)
        """
        if not text.strip():
            return ""

        length = SummaryLength(length)
        key = cache_key("summary", text, length.value)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = self._generate(build_summary_prompt(text, length.value))
        if result.ok:
            summary = str(result.value)
        else:
            logger.info(f"Using word-count summary ({result.failure.value})")  # type: ignore[union-attr]
            summary = fallback_summary(text, length)

        self._cache.put(key, summary)
        return summary

    def extract_key_points(self, text: str) -> list[str]:
        """Extract key points from text.

        Returns:
            Key points without bullet markers ([] for blank input)
        """
        if not text.strip():
            return []

        key = cache_key("keypoints", text)
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        result = self._generate(KEY_POINTS_PROMPT.format(text=text))
        raw = str(result.value) if result.ok else fallback_key_points(text)
        points = clean_key_points(raw)

        self._cache.put(key, points)
        return list(points)

    def analyze_sentiment(self, text: str) -> Sentiment:
        """Classify text as positive, neutral or negative.

        A reply that is not one of the three labels is replaced by the
        local word-count classification.
        """
        if not text.strip():
            return Sentiment.NEUTRAL

        key = cache_key("sentiment", text)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        sentiment = None
        result = self._generate(SENTIMENT_PROMPT.format(text=text))
        if result.ok:
            sentiment = parse_sentiment(str(result.value))
            if sentiment is None:
                logger.warning(f"Unrecognized sentiment label: '{str(result.value)[:30]}'")

        if sentiment is None:
            sentiment = fallback_sentiment(text)

        self._cache.put(key, sentiment)
        return sentiment

    def suggest_categories(self, text: str) -> list[Category]:
        """Suggest categories from the fixed set.

        Labels outside the set are dropped; if none remain, keyword
        categorization is used instead.
        """
        if not text.strip():
            return [Category.OTHER]

        key = cache_key("categories", text)
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        categories: list[Category] = []
        result = self._generate(CATEGORIES_PROMPT.format(text=text))
        if result.ok:
            categories = parse_category_labels(str(result.value))
            if not categories:
                logger.warning(f"No known categories in reply: '{str(result.value)[:50]}'")

        if not categories:
            categories = fallback_categories(text)

        self._cache.put(key, categories)
        return list(categories)

    def annotate(self, text: str) -> NoteAnnotations:
        """Compute every annotation for text."""
        return NoteAnnotations(
            summary=self.summarize(text),
            key_points=self.extract_key_points(text),
            sentiment=self.analyze_sentiment(text),
            categories=self.suggest_categories(text),
        )

    def _generate(self, prompt: str) -> GenerationResult:
        return attempt_generation(
            self._client,
            GenerationRequest(prompt=prompt, kind=ModelKind.TEXT, options=self._options),
            probe=True,
        )


__all__ = ["NoteAnnotations", "NoteEnricher"]
