"""Note service composing storage with search and enrichment.

Storage errors propagate unchanged; generation failures never do.
"""

import logging
from typing import TYPE_CHECKING

from .models import Category, Note
from .repository import NoteRepository

if TYPE_CHECKING:
    from ..enrichment import NoteAnnotations, NoteEnricher, SummaryLength
    from ..query import QueryResolver

logger = logging.getLogger(__name__)


class NoteService:
    """Service for searching and annotating a user's notes."""

    def __init__(
        self,
        repository: NoteRepository,
        resolver: "QueryResolver",
        enricher: "NoteEnricher",
    ) -> None:
        """Initialize note service.

        Args:
            repository: Storage collaborator
            resolver: Query resolver
            enricher: Note enricher
        """
        self._repository = repository
        self._resolver = resolver
        self._enricher = enricher

    def search(self, user_id: str, query: str) -> list[Note]:
        """Find a user's notes matching a natural-language query.

        Args:
            user_id: Owner whose notes are searched
            query: Free-text query; blank returns every note

        Returns:
            Matching notes in result order

        Raises:
            StorageError: If the notes cannot be read
        """
        notes = self._repository.list_notes(user_id)
        return self._resolver.resolve(query, notes)

    def create_note(
        self,
        user_id: str,
        title: str,
        content: str,
        category: Category | None = None,
    ) -> Note:
        """Create a note, picking the first suggested category if none is given.

        Raises:
            StorageError: If the note cannot be stored
        """
        if category is None:
            category = self._enricher.suggest_categories(f"{title} {content}")[0]
            logger.debug(f"Suggested category {category.value} for new note")

        return self._repository.create_note(user_id, title, content, category)

    def summarize_note(
        self,
        note_id: str,
        user_id: str,
        length: "SummaryLength | str" = "medium",
    ) -> Note:
        """Summarize a stored note and persist the summary.

        Raises:
            NoteNotFoundError: If the note does not exist
            UnauthorizedError: If the note belongs to another user
        """
        note = self._repository.get_note(note_id, user_id)
        summary = self._enricher.summarize(note.content, length)
        updated = self._repository.update_note(note_id, user_id, {"summary": summary})

        logger.info(f"Stored summary for note {note_id} ({len(summary)} chars)")
        return updated

    def annotate(self, text: str) -> "NoteAnnotations":
        """Compute summary, key points, sentiment and categories for text."""
        return self._enricher.annotate(text)


__all__ = ["NoteService"]
