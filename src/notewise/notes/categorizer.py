"""Keyword categorization for notes.

Local fallback for category suggestions when the generation service is
unavailable. Matching is substring based and case-insensitive.
"""

import logging

from .models import Category

logger = logging.getLogger(__name__)

CATEGORY_KEYWORDS: dict[Category, list[str]] = {
    Category.WORK: ["meeting", "project", "deadline", "client", "report"],
    Category.PERSONAL: ["family", "home", "health", "hobby", "friend"],
    Category.IDEAS: ["idea", "concept", "innovation", "creative", "solution"],
    Category.TASKS: ["todo", "task", "action", "complete", "finish"],
}


def categorize(text: str) -> list[Category]:
    """Suggest categories using keyword matching.

    Every category with at least one keyword hit is returned, in the fixed
    order Work, Personal, Ideas, Tasks. Returns [OTHER] if nothing matches.

    Args:
        text: Note text

    Returns:
        Non-empty list of categories
    """
    text_lower = text.lower()

    categories = [
        category
        for category, keywords in CATEGORY_KEYWORDS.items()
        if any(keyword in text_lower for keyword in keywords)
    ]

    if not categories:
        logger.debug(f"No category match for '{text[:50]}...', using Other")
        return [Category.OTHER]

    logger.debug(
        f"Categorized '{text[:50]}...' as {[c.value for c in categories]}"
    )
    return categories


def parse_category_labels(text: str) -> list[Category]:
    """Parse a comma-separated label list, keeping only known categories.

    Unknown labels are dropped; duplicates keep their first position.

    Args:
        text: Model output such as "Work, Ideas, Finance"

    Returns:
        Recognized categories in order of appearance (possibly empty)
    """
    categories: list[Category] = []
    for label in text.replace("\n", ",").split(","):
        category = Category.from_label(label.strip(" .*-•\t"))
        if category is not None and category not in categories:
            categories.append(category)
    return categories


__all__ = [
    "CATEGORY_KEYWORDS",
    "categorize",
    "parse_category_labels",
]
