"""Generation client protocol and data classes.

Defines the interface to the external text/embedding service and the
explicit result type used to drive fallbacks.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .errors import GenerationError, MalformedResponse, ServiceUnavailable

logger = logging.getLogger(__name__)


class ModelKind(Enum):
    """Which model a request targets."""

    TEXT = "text"
    EMBEDDING = "embedding"


class FailureReason(Enum):
    """Why a generation attempt produced no value."""

    UNAVAILABLE = "unavailable"
    MALFORMED = "malformed"


@dataclass
class GenerationOptions:
    """Optional sampling parameters.

    Attributes:
        temperature: Sampling temperature (None uses the client default)
        max_tokens: Maximum output length (None uses the client default)
    """

    temperature: float | None = None
    max_tokens: int | None = None


@dataclass
class GenerationRequest:
    """A single prompt sent to the generation service.

    Attributes:
        prompt: Prompt text (or text to embed)
        kind: Target model kind
        options: Sampling parameters, ignored for embeddings
    """

    prompt: str
    kind: ModelKind = ModelKind.TEXT
    options: GenerationOptions = field(default_factory=GenerationOptions)


@dataclass
class GenerationResult:
    """Outcome of a generation attempt.

    Exactly one of value or failure is set.

    Attributes:
        value: Generated text or embedding vector
        failure: Failure reason when no value was produced
        error: Human-readable failure detail
    """

    value: str | list[float] | None = None
    failure: FailureReason | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the attempt produced a value."""
        return self.failure is None

    @classmethod
    def success(cls, value: str | list[float]) -> "GenerationResult":
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def failed(cls, reason: FailureReason, error: str) -> "GenerationResult":
        """Create a failed result."""
        return cls(failure=reason, error=error)


class GenerationClient(Protocol):
    """Interface for the external text/embedding generation service."""

    def probe(self) -> bool:
        """Check whether the service answers.

        Returns:
            True only on a successful response; never raises
        """
        ...

    def generate(
        self,
        prompt: str,
        kind: ModelKind = ModelKind.TEXT,
        options: GenerationOptions | None = None,
    ) -> Any:
        """Generate text or an embedding for prompt.

        Args:
            prompt: Prompt text
            kind: Target model kind
            options: Sampling parameters

        Returns:
            Generated string for TEXT, list of floats for EMBEDDING

        Raises:
            ServiceUnavailable: If the call errors or times out
            MalformedResponse: If the response has the wrong shape
        """
        ...


def attempt_generation(
    client: GenerationClient,
    request: GenerationRequest,
    probe: bool = False,
) -> GenerationResult:
    """Run a request and capture failures as a GenerationResult.

    Args:
        client: Generation client
        request: Request to send
        probe: If True, check liveness before sending

    Returns:
        GenerationResult with either a value or a failure reason
    """
    if probe and not client.probe():
        return GenerationResult.failed(
            FailureReason.UNAVAILABLE, "Generation service did not answer probe"
        )

    try:
        value = client.generate(request.prompt, request.kind, request.options)
    except MalformedResponse as e:
        logger.warning(f"Malformed {request.kind.value} response: {e}")
        return GenerationResult.failed(FailureReason.MALFORMED, str(e))
    except ServiceUnavailable as e:
        logger.info(f"Generation service unavailable: {e}")
        return GenerationResult.failed(FailureReason.UNAVAILABLE, str(e))
    except GenerationError as e:
        return GenerationResult.failed(FailureReason.UNAVAILABLE, str(e))

    return GenerationResult.success(value)


__all__ = [
    "FailureReason",
    "GenerationClient",
    "GenerationOptions",
    "GenerationRequest",
    "GenerationResult",
    "ModelKind",
    "attempt_generation",
]
