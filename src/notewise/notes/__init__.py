"""Notes module for notewise.

Provides the note model, keyword categorization, the storage contract and
the note service.
"""

from .categorizer import CATEGORY_KEYWORDS, categorize, parse_category_labels
from .errors import NoteNotFoundError, StorageError, UnauthorizedError
from .models import Category, Note
from .repository import NoteRepository
from .service import NoteService

__all__ = [
    "CATEGORY_KEYWORDS",
    "Category",
    "Note",
    "NoteNotFoundError",
    "NoteRepository",
    "NoteService",
    "StorageError",
    "UnauthorizedError",
    "categorize",
    "parse_category_labels",
]
