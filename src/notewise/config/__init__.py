"""Configuration module for notewise.

This module provides typed configuration for the query and enrichment engine.
"""

from dataclasses import dataclass, field


@dataclass
class GenerationConfig:
    """Generation service configuration."""

    provider: str = "ollama"
    host: str = "http://localhost:11434"
    text_model: str = "llama2"
    embedding_model: str = "nomic-embed-text"
    timeout_seconds: float = 10.0
    temperature: float = 0.3
    max_tokens: int = 150


@dataclass
class CacheConfig:
    """Result cache configuration."""

    max_entries: int = 500
    ttl_seconds: int = 24 * 60 * 60


@dataclass
class SearchConfig:
    """Query resolution configuration."""

    embedding_workers: int = 4


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class NotewiseConfig:
    """Main notewise configuration."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Public API
__all__ = [
    "CacheConfig",
    "GenerationConfig",
    "LoggingConfig",
    "NotewiseConfig",
    "SearchConfig",
]
