"""Natural-language query resolution over a note set.

Tries, in order: cached result, date filter, semantic ranking, keyword
filter. Generation service failures never reach the caller; they move the
query to the next tier.
"""

import hashlib
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from ..cache import ResultCache, cache_key
from ..generation import (
    GenerationClient,
    GenerationRequest,
    GenerationResult,
    ModelKind,
    attempt_generation,
)
from ..notes.models import Note
from .dates import DateReferenceParser
from .ranking import DimensionMismatch, rank

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_WORKERS = 4


class SearchTier(Enum):
    """Which strategy produced a query result."""

    PASSTHROUGH = "passthrough"
    CACHE = "cache"
    DATE = "date"
    SEMANTIC = "semantic"
    KEYWORD = "keyword"


@dataclass
class QueryResult:
    """Notes matching a query.

    Attributes:
        notes: Matching notes in result order
        tier: Strategy that produced them
    """

    notes: list[Note]
    tier: SearchTier


class SemanticSearchFailed(Exception):
    """Raised internally when the semantic tier cannot produce a ranking."""

    pass


def _as_aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def notes_fingerprint(notes: Sequence[Note]) -> str:
    """Digest of note ids and update times, in order.

    Changes whenever a note is added, removed, reordered or edited.
    """
    digest = hashlib.sha256()
    for note in notes:
        digest.update(f"{note.id}\x1f{note.updated_at.isoformat()}\x1e".encode())
    return digest.hexdigest()


def keyword_filter(query: str, notes: Sequence[Note]) -> list[Note]:
    """Keep notes containing every whitespace-separated query term.

    Matching is case-insensitive over title, content and category, and
    preserves input order.
    """
    terms = query.lower().split()
    return [
        note
        for note in notes
        if all(term in note.searchable_text.lower() for term in terms)
    ]


def date_filter(since: datetime, notes: Sequence[Note]) -> list[Note]:
    """Keep notes created on or after since, preserving input order."""
    since = _as_aware(since)
    return [note for note in notes if _as_aware(note.created_at) >= since]


class QueryResolver:
    """Resolves free-text queries against a caller-supplied note set.

    Holds no state between calls apart from the injected cache and client.
    """

    def __init__(
        self,
        client: GenerationClient,
        cache: ResultCache,
        date_parser: DateReferenceParser | None = None,
        embedding_workers: int = DEFAULT_EMBEDDING_WORKERS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            client: Generation client used for probing and embeddings
            cache: Shared result cache
            date_parser: Date parser (defaults to one sharing this clock)
            embedding_workers: Maximum concurrent embedding requests
            clock: Returns the current timezone-aware time
        """
        if embedding_workers <= 0:
            raise ValueError("embedding_workers must be positive")

        self._client = client
        self._cache = cache
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._date_parser = date_parser or DateReferenceParser(clock=self._clock)
        self._embedding_workers = embedding_workers

    def resolve(self, query: str, notes: Sequence[Note]) -> list[Note]:
        """Return the notes matching query, in result order."""
        return self.resolve_detailed(query, notes).notes

    def resolve_detailed(self, query: str, notes: Sequence[Note]) -> QueryResult:
        """Resolve query and report which tier produced the result.

        Args:
            query: Free-text query
            notes: Candidate notes

        Returns:
            QueryResult with the matching notes and the tier used
        """
        if not query.strip() or not notes:
            return QueryResult(notes=list(notes), tier=SearchTier.PASSTHROUGH)

        now = self._clock()
        key = cache_key(
            "query",
            query.strip(),
            len(notes),
            notes_fingerprint(notes),
            now.date().isoformat(),
        )

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Query cache hit: '{query[:50]}'")
            return QueryResult(notes=list(cached), tier=SearchTier.CACHE)

        result = self._evaluate(query, notes, now)
        self._cache.put(key, list(result.notes))

        logger.info(
            f"Resolved query '{query[:50]}' via {result.tier.value}: "
            f"{len(result.notes)}/{len(notes)} notes"
        )
        return result

    def _evaluate(self, query: str, notes: Sequence[Note], now: datetime) -> QueryResult:
        reference = self._date_parser.parse(query, now=now)
        if reference is not None:
            return QueryResult(
                notes=date_filter(reference.value, notes), tier=SearchTier.DATE
            )

        if self._client.probe():
            try:
                return QueryResult(
                    notes=self.semantic_rank(query, notes), tier=SearchTier.SEMANTIC
                )
            except SemanticSearchFailed as e:
                logger.warning(f"Semantic search failed, using keyword search: {e}")
        else:
            logger.info("Generation service not available, using keyword search")

        return QueryResult(notes=keyword_filter(query, notes), tier=SearchTier.KEYWORD)

    def semantic_rank(self, query: str, notes: Sequence[Note]) -> list[Note]:
        """Rank every note by embedding similarity to query.

        Note embeddings are requested through a bounded worker pool. The
        first failure abandons the whole ranking.

        Raises:
            SemanticSearchFailed: If any embedding fails or dimensions differ
        """
        query_result = self._embed(query)
        if not query_result.ok:
            raise SemanticSearchFailed(f"query embedding: {query_result.error}")

        note_vectors = self._embed_notes(notes)

        try:
            return rank(query_result.value, list(zip(notes, note_vectors)))  # type: ignore[arg-type]
        except DimensionMismatch as e:
            raise SemanticSearchFailed(str(e)) from e

    def _embed(self, text: str) -> GenerationResult:
        return attempt_generation(
            self._client, GenerationRequest(prompt=text, kind=ModelKind.EMBEDDING)
        )

    def _embed_notes(self, notes: Sequence[Note]) -> list[list[float]]:
        workers = min(self._embedding_workers, len(notes))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="notewise-embed"
        ) as executor:
            futures = [executor.submit(self._embed_or_raise, note) for note in notes]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            for future in pending:
                future.cancel()

            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()  # type: ignore[misc]

            return [future.result() for future in futures]

    def _embed_or_raise(self, note: Note) -> list[float]:
        result = self._embed(note.embedding_text)
        if not result.ok:
            raise SemanticSearchFailed(f"note {note.id} embedding: {result.error}")
        return result.value  # type: ignore[return-value]


__all__ = [
    "DEFAULT_EMBEDDING_WORKERS",
    "QueryResolver",
    "QueryResult",
    "SearchTier",
    "SemanticSearchFailed",
    "date_filter",
    "keyword_filter",
    "notes_fingerprint",
]
