"""Storage interface consumed by notewise.

Persistence is owned by an external collaborator; this module only fixes
the contract it must satisfy.
"""

from typing import Any, Protocol

from .models import Category, Note


class NoteRepository(Protocol):
    """Protocol for note persistence scoped to an owner.

    Implementations raise NoteNotFoundError for unknown ids and
    UnauthorizedError when the note belongs to another user.
    """

    def list_notes(self, user_id: str) -> list[Note]:
        """Return all notes owned by user_id, newest first."""
        ...

    def get_note(self, note_id: str, user_id: str) -> Note:
        """Return one note."""
        ...

    def create_note(
        self,
        user_id: str,
        title: str,
        content: str,
        category: Category,
        summary: str | None = None,
    ) -> Note:
        """Persist a new note and return the stored row."""
        ...

    def update_note(self, note_id: str, user_id: str, changes: dict[str, Any]) -> Note:
        """Apply field changes and return the stored row."""
        ...

    def delete_note(self, note_id: str, user_id: str) -> None:
        """Delete a note."""
        ...


__all__ = ["NoteRepository"]
