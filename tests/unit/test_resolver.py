"""Unit tests for the query resolver."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from notewise.cache import ResultCache
from notewise.generation import MockGenerationClient, ModelKind
from notewise.notes import Category, Note
from notewise.query import (
    QueryResolver,
    SearchTier,
    date_filter,
    keyword_filter,
    notes_fingerprint,
)


@pytest.fixture
def resolver(
    mock_client: MockGenerationClient, cache: ResultCache, fixed_now: datetime
) -> QueryResolver:
    """Resolver on the mock client with the clock pinned to FIXED_NOW."""
    return QueryResolver(client=mock_client, cache=cache, clock=lambda: fixed_now)


def ids(notes: list[Note]) -> list[str]:
    return [note.id for note in notes]


def script_embeddings(client: MockGenerationClient, query: str, notes: list[Note]) -> None:
    """Query points at note 2, note 3 is halfway, the rest are orthogonal."""
    client.set_embedding(query, [1.0, 0.0])
    client.set_embedding(notes[1].embedding_text, [1.0, 0.0])
    client.set_embedding(notes[2].embedding_text, [0.5, 0.5])
    client.set_default_embedding([0.0, 1.0])


class TestPassthrough:
    """Tests for the empty-input guard."""

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    def test_blank_query_returns_all_notes(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        cache: ResultCache,
        sample_notes: list[Note],
        query: str,
    ) -> None:
        """Test that a blank query is returned unchanged without side effects."""
        result = resolver.resolve_detailed(query, sample_notes)

        assert result.tier is SearchTier.PASSTHROUGH
        assert result.notes == sample_notes
        assert len(cache) == 0
        assert mock_client.probe_count == 0

    def test_empty_note_set(
        self, resolver: QueryResolver, mock_client: MockGenerationClient, cache: ResultCache
    ) -> None:
        """Test that an empty note set short-circuits."""
        assert resolver.resolve("meeting", []) == []
        assert len(cache) == 0
        assert mock_client.probe_count == 0


class TestDateTier:
    """Tests for date-filtered queries."""

    def test_yesterday(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that a date phrase filters by creation time and skips the probe."""
        result = resolver.resolve_detailed("notes from yesterday", sample_notes)

        assert result.tier is SearchTier.DATE
        assert ids(result.notes) == ["1", "2"]
        assert mock_client.probe_count == 0

    def test_date_filter_keeps_order(self, sample_notes: list[Note]) -> None:
        """Test the date filter directly."""
        since = datetime(2026, 10, 10, tzinfo=UTC)
        assert ids(date_filter(since, sample_notes)) == ["1", "2", "3"]

    def test_date_tier_wins_over_semantic(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that dates take precedence even when embeddings are available."""
        mock_client.set_default_embedding([1.0, 0.0])

        result = resolver.resolve_detailed("project notes from last week", sample_notes)

        assert result.tier is SearchTier.DATE
        assert ids(result.notes) == ["1", "2"]
        assert mock_client.call_count == 0


class TestSemanticTier:
    """Tests for embedding-ranked queries."""

    def test_ranks_all_notes_by_similarity(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test descending similarity with stable ties."""
        script_embeddings(mock_client, "groceries", sample_notes)

        result = resolver.resolve_detailed("groceries", sample_notes)

        assert result.tier is SearchTier.SEMANTIC
        assert ids(result.notes) == ["2", "3", "1", "4"]

    def test_embeds_query_and_each_note_once(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test the number and kind of embedding requests."""
        script_embeddings(mock_client, "groceries", sample_notes)

        resolver.resolve("groceries", sample_notes)

        kinds = [kind for kind, _ in mock_client.prompts]
        assert kinds == [ModelKind.EMBEDDING] * (1 + len(sample_notes))
        assert mock_client.prompts[0] == (ModelKind.EMBEDDING, "groceries")
        assert mock_client.probe_count == 1

    def test_single_worker(
        self,
        mock_client: MockGenerationClient,
        cache: ResultCache,
        fixed_now: datetime,
        sample_notes: list[Note],
    ) -> None:
        """Test that a pool of one still ranks correctly."""
        script_embeddings(mock_client, "groceries", sample_notes)
        resolver = QueryResolver(
            mock_client, cache, embedding_workers=1, clock=lambda: fixed_now
        )

        assert ids(resolver.resolve("groceries", sample_notes)) == ["2", "3", "1", "4"]

    def test_invalid_worker_count(
        self, mock_client: MockGenerationClient, cache: ResultCache
    ) -> None:
        """Test that the embedding pool must have at least one worker."""
        with pytest.raises(ValueError):
            QueryResolver(mock_client, cache, embedding_workers=0)


class TestKeywordTier:
    """Tests for keyword fallback."""

    def test_unavailable_service_uses_keywords(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that a failed probe goes straight to keyword matching."""
        mock_client.set_available(False)

        result = resolver.resolve_detailed("meeting project", sample_notes)

        assert result.tier is SearchTier.KEYWORD
        assert ids(result.notes) == ["1", "3"]
        assert mock_client.call_count == 0

    def test_one_failed_note_embedding_falls_back(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that a single embedding failure abandons semantic ranking."""
        script_embeddings(mock_client, "meeting", sample_notes)
        mock_client.fail_for(sample_notes[3].embedding_text)

        result = resolver.resolve_detailed("meeting", sample_notes)

        assert result.tier is SearchTier.KEYWORD
        assert ids(result.notes) == ["1", "3"]

    def test_failed_query_embedding_falls_back(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that a missing query embedding skips the note embeddings."""
        mock_client.fail_for("habit")

        result = resolver.resolve_detailed("habit", sample_notes)

        assert result.tier is SearchTier.KEYWORD
        assert ids(result.notes) == ["4"]
        assert mock_client.call_count == 1

    def test_dimension_mismatch_falls_back(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that vectors of differing length are not truncated."""
        mock_client.set_embedding("grocery", [1.0, 0.0, 0.0])
        mock_client.set_default_embedding([1.0, 0.0])

        result = resolver.resolve_detailed("grocery", sample_notes)

        assert result.tier is SearchTier.KEYWORD
        assert ids(result.notes) == ["2"]

    def test_no_keyword_match(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that no match yields an empty list."""
        mock_client.set_available(False)
        assert resolver.resolve("vacation", sample_notes) == []

    @pytest.mark.parametrize(
        "query", ["notes from 5000 years ago", "notes from 99999999 days ago"]
    )
    def test_out_of_range_date_offset_falls_back(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
        query: str,
    ) -> None:
        """Test that an impossible relative date is not a hard failure."""
        mock_client.set_available(False)

        result = resolver.resolve_detailed(query, sample_notes)

        assert result.tier is SearchTier.KEYWORD
        assert result.notes == []

    def test_keyword_filter_matches_category(self, sample_notes: list[Note]) -> None:
        """Test that category labels are searchable."""
        assert ids(keyword_filter("IDEAS", sample_notes)) == ["4"]

    def test_keyword_filter_requires_all_terms(self, sample_notes: list[Note]) -> None:
        """Test AND semantics over terms."""
        assert ids(keyword_filter("meeting roadmap", sample_notes)) == ["1"]


class TestQueryCache:
    """Tests for result caching."""

    def test_second_call_hits_cache(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that identical queries over identical notes reuse the result."""
        mock_client.set_available(False)
        first = resolver.resolve_detailed("meeting project", sample_notes)
        second = resolver.resolve_detailed("meeting project", sample_notes)

        assert first.tier is SearchTier.KEYWORD
        assert second.tier is SearchTier.CACHE
        assert second.notes == first.notes
        assert mock_client.probe_count == 1

    def test_empty_result_is_cached(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that an empty result still counts as a hit."""
        mock_client.set_available(False)
        resolver.resolve("vacation", sample_notes)

        assert resolver.resolve_detailed("vacation", sample_notes).tier is SearchTier.CACHE

    def test_edited_note_misses_cache(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that note edits invalidate cached results."""
        mock_client.set_available(False)
        resolver.resolve("meeting", sample_notes)

        edited = list(sample_notes)
        edited[1] = replace(
            sample_notes[1],
            content="Meeting snacks",
            updated_at=sample_notes[1].updated_at + timedelta(minutes=5),
        )
        result = resolver.resolve_detailed("meeting", edited)

        assert result.tier is SearchTier.KEYWORD
        assert ids(result.notes) == ["1", "2", "3"]

    def test_cached_list_is_not_shared(
        self,
        resolver: QueryResolver,
        mock_client: MockGenerationClient,
        sample_notes: list[Note],
    ) -> None:
        """Test that mutating a returned list does not corrupt the cache."""
        mock_client.set_available(False)
        resolver.resolve("meeting", sample_notes).clear()

        assert ids(resolver.resolve("meeting", sample_notes)) == ["1", "3"]


class TestNotesFingerprint:
    """Tests for note-set fingerprints."""

    def test_order_sensitive(self, sample_notes: list[Note]) -> None:
        """Test that reordering changes the fingerprint."""
        assert notes_fingerprint(sample_notes) != notes_fingerprint(sample_notes[::-1])

    def test_ignores_content_without_update(self, sample_notes: list[Note]) -> None:
        """Test that only ids and update times are hashed."""
        copy = [replace(note, category=Category.OTHER) for note in sample_notes]
        assert notes_fingerprint(copy) == notes_fingerprint(sample_notes)
