"""Engine wiring for notewise.

Builds one shared cache and generation client and hands them to the query
resolver and the note enricher.
"""

import logging
from dataclasses import dataclass

from .cache import ResultCache
from .config import NotewiseConfig
from .enrichment import NoteEnricher
from .generation import GenerationClient, GenerationOptions, create_generation_client
from .notes import NoteRepository, NoteService
from .query import QueryResolver

logger = logging.getLogger(__name__)


@dataclass
class NoteEngine:
    """The wired query and enrichment engine.

    Attributes:
        client: Generation client shared by all components
        cache: Result cache shared by all components
        resolver: Query resolver
        enricher: Note enricher
    """

    client: GenerationClient
    cache: ResultCache
    resolver: QueryResolver
    enricher: NoteEnricher

    def note_service(self, repository: NoteRepository) -> NoteService:
        """Create a NoteService over a storage collaborator."""
        return NoteService(repository, self.resolver, self.enricher)


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_engine(
    config: NotewiseConfig | None = None,
    client: GenerationClient | None = None,
    use_mock: bool = False,
) -> NoteEngine:
    """Create a NoteEngine from configuration.

    Args:
        config: Engine configuration (defaults used when None)
        client: Pre-built generation client, overriding the configured one
        use_mock: Build a MockGenerationClient instead of the Ollama client

    Returns:
        NoteEngine with a fresh cache
    """
    config = config or NotewiseConfig()

    if client is None:
        client = create_generation_client(config.generation, use_mock=use_mock)

    cache = ResultCache(
        max_entries=config.cache.max_entries,
        ttl_seconds=config.cache.ttl_seconds,
    )
    resolver = QueryResolver(
        client=client,
        cache=cache,
        embedding_workers=config.search.embedding_workers,
    )
    enricher = NoteEnricher(
        client=client,
        cache=cache,
        options=GenerationOptions(
            temperature=config.generation.temperature,
            max_tokens=config.generation.max_tokens,
        ),
    )

    logger.debug(
        f"Engine created (cache={config.cache.max_entries} entries, "
        f"ttl={config.cache.ttl_seconds}s, workers={config.search.embedding_workers})"
    )
    return NoteEngine(client=client, cache=cache, resolver=resolver, enricher=enricher)


__all__ = ["NoteEngine", "create_engine", "setup_logging"]
