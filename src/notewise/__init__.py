"""notewise - Natural-language search and enrichment for short text notes.

notewise answers queries like "notes from last week" or "meeting project"
over a user's notes, falling back through:
- Date filtering (no model needed)
- Semantic ranking with Ollama embeddings
- Keyword matching

It also derives summaries, key points, sentiment and category suggestions,
with local heuristics when Ollama is unreachable.

Usage:
    from notewise import create_engine, load_config

    engine = create_engine(load_config("notewise.yaml"))
    results = engine.resolver.resolve("meeting project", notes)
"""

__version__ = "0.1.0"

from .config import NotewiseConfig
from .config.loader import load_config
from .engine import NoteEngine, create_engine, setup_logging

__all__ = [
    "NoteEngine",
    "NotewiseConfig",
    "__version__",
    "create_engine",
    "load_config",
    "setup_logging",
]
