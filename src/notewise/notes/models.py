"""Data models for notes.

Defines the Note entity owned by the storage collaborator and the closed
Category set used for classification.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class Category(Enum):
    """Fixed categories for notes."""

    WORK = "Work"
    PERSONAL = "Personal"
    IDEAS = "Ideas"
    TASKS = "Tasks"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str) -> "Category | None":
        """Look up a category by label, ignoring case and surrounding space.

        Args:
            label: Category label such as "work" or " Ideas"

        Returns:
            Matching Category, or None if the label is not in the set
        """
        normalized = label.strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        return None


def _parse_timestamp(value: Any) -> datetime:
    """Read a storage timestamp as an aware datetime (naive means UTC)."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


@dataclass
class Note:
    """A stored text note.

    Attributes:
        id: Unique, immutable identifier
        title: Note title
        content: Note body
        category: Assigned category
        created_at: Creation timestamp
        updated_at: Last update timestamp
        user_id: Owner identifier
        summary: Optional stored summary
    """

    id: str
    title: str
    content: str
    category: Category
    created_at: datetime
    updated_at: datetime
    user_id: str
    summary: str | None = None

    @property
    def searchable_text(self) -> str:
        """Text matched by keyword search."""
        return f"{self.title} {self.content} {self.category.value}"

    @property
    def embedding_text(self) -> str:
        """Text embedded for semantic search."""
        return f"{self.title} {self.content}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a storage row."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "user_id": self.user_id,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        """Create from a storage row.

        Raises:
            ValueError: If the category or a timestamp is invalid
        """
        created_at = _parse_timestamp(data["created_at"])
        updated_at = _parse_timestamp(data.get("updated_at") or created_at)

        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=Category(data.get("category") or Category.OTHER.value),
            created_at=created_at,
            updated_at=updated_at,
            user_id=data.get("user_id", ""),
            summary=data.get("summary"),
        )


__all__ = ["Category", "Note"]
