"""Generation client module for notewise.

Provides text generation and embeddings using Ollama or a mock implementation.
"""

from typing import TYPE_CHECKING

from .errors import GenerationError, MalformedResponse, ServiceUnavailable
from .mock import MockGenerationClient
from .model import (
    FailureReason,
    GenerationClient,
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    ModelKind,
    attempt_generation,
)

if TYPE_CHECKING:
    from ..config import GenerationConfig


def create_generation_client(
    config: "GenerationConfig | None" = None,
    use_mock: bool = False,
) -> GenerationClient:
    """Create a generation client instance.

    Args:
        config: Generation configuration
        use_mock: If True, return mock implementation for testing

    Returns:
        GenerationClient implementation
    """
    if use_mock:
        return MockGenerationClient()

    from ..config import GenerationConfig

    config = config or GenerationConfig()

    if config.provider != "ollama":
        raise ValueError(f"Unknown generation provider: {config.provider}")

    from .ollama import OllamaGenerationClient

    return OllamaGenerationClient(
        host=config.host,
        text_model=config.text_model,
        embedding_model=config.embedding_model,
        timeout=config.timeout_seconds,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


__all__ = [
    "FailureReason",
    "GenerationClient",
    "GenerationError",
    "GenerationOptions",
    "GenerationRequest",
    "GenerationResult",
    "MalformedResponse",
    "MockGenerationClient",
    "ModelKind",
    "ServiceUnavailable",
    "attempt_generation",
    "create_generation_client",
]
