"""Error types raised by the note storage collaborator.

These pass through the engine unchanged.
"""


class StorageError(Exception):
    """Base exception for note storage failures."""

    pass


class NoteNotFoundError(StorageError):
    """Raised when a note id does not exist."""

    def __init__(self, note_id: str) -> None:
        """Initialize not-found error.

        Args:
            note_id: The missing note id.
        """
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


class UnauthorizedError(StorageError):
    """Raised when the caller does not own the note or is not authenticated."""

    pass


__all__ = [
    "NoteNotFoundError",
    "StorageError",
    "UnauthorizedError",
]
