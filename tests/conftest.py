"""Shared pytest fixtures for notewise tests.

Provides a fixed clock, a small note set and isolated cache/client
instances so no test touches a real Ollama server.
"""

from datetime import UTC, datetime

import pytest

from notewise.cache import ResultCache
from notewise.generation import MockGenerationClient
from notewise.notes import Category, Note

# Monday
FIXED_NOW = datetime(2026, 10, 19, 15, 30, tzinfo=UTC)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def make_note(
    note_id: str,
    title: str,
    content: str,
    category: Category = Category.OTHER,
    created_at: datetime = FIXED_NOW,
    user_id: str = "user-1",
) -> Note:
    """Build a note with matching created/updated timestamps."""
    return Note(
        id=note_id,
        title=title,
        content=content,
        category=category,
        created_at=created_at,
        updated_at=created_at,
        user_id=user_id,
    )


@pytest.fixture
def fixed_now() -> datetime:
    """The reference time used by date-sensitive tests."""
    return FIXED_NOW


@pytest.fixture
def fake_clock() -> FakeClock:
    """A controllable monotonic clock for cache expiry."""
    return FakeClock()


@pytest.fixture
def cache(fake_clock: FakeClock) -> ResultCache:
    """An isolated result cache on the fake clock."""
    return ResultCache(max_entries=500, ttl_seconds=24 * 60 * 60, clock=fake_clock)


@pytest.fixture
def mock_client() -> MockGenerationClient:
    """A fresh mock generation client (available by default)."""
    return MockGenerationClient()


@pytest.fixture
def sample_notes() -> list[Note]:
    """Four notes, newest first, as the storage layer returns them."""
    return [
        make_note(
            "1",
            "Project meeting notes",
            "Discussed the roadmap",
            Category.WORK,
            datetime(2026, 10, 19, 9, 0, tzinfo=UTC),
        ),
        make_note(
            "2",
            "Grocery list",
            "Milk, eggs and bread",
            Category.PERSONAL,
            datetime(2026, 10, 18, 12, 0, tzinfo=UTC),
        ),
        make_note(
            "3",
            "Meeting recap",
            "The project is running late",
            Category.WORK,
            datetime(2026, 10, 10, 8, 0, tzinfo=UTC),
        ),
        make_note(
            "4",
            "App concept",
            "A new idea for a habit tracker",
            Category.IDEAS,
            datetime(2026, 9, 1, 20, 0, tzinfo=UTC),
        ),
    ]
