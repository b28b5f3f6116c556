"""Prompt templates for note enrichment."""

SUMMARY_PROMPTS: dict[str, str] = {
    "short": "Summarize this in 1-2 sentences:",
    "medium": "Summarize this in 2-3 sentences:",
    "long": "Summarize this in 3-4 sentences:",
}

KEY_POINTS_PROMPT = """Extract 3-5 key points from this text, format as a bullet list:

{text}"""

SENTIMENT_PROMPT = """Analyze the sentiment of this text. Reply with only one word (positive, neutral, or negative):

{text}"""

CATEGORIES_PROMPT = """Suggest 2-3 relevant categories for this text from the following options: Work, Personal, Ideas, Tasks, Other. Format as a comma-separated list:

{text}"""


def build_summary_prompt(text: str, length: str) -> str:
    """Build the summarization prompt for a length tier."""
    return f"{SUMMARY_PROMPTS[length]}\n\n{text}"


__all__ = [
    "CATEGORIES_PROMPT",
    "KEY_POINTS_PROMPT",
    "SENTIMENT_PROMPT",
    "SUMMARY_PROMPTS",
    "build_summary_prompt",
]
