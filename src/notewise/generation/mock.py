"""Mock generation client for testing.

Provides a controllable implementation for unit and integration tests and
for running without an Ollama server.
"""

import threading

from .errors import MalformedResponse, ServiceUnavailable
from .model import GenerationOptions, ModelKind


class MockGenerationClient:
    """Mock generation client.

    Allows scripting availability, text responses, per-text embeddings and
    failures. Safe to call from worker threads.
    """

    def __init__(self) -> None:
        """Initialize mock generation client."""
        self._available: bool = True
        self._response_text: str = "This is a mock response."
        self._embeddings: dict[str, list[float]] = {}
        self._default_embedding: list[float] | None = None
        self._error: Exception | None = None
        self._failing_texts: set[str] = set()
        self._probe_count: int = 0
        self._prompts: list[tuple[ModelKind, str]] = []
        self._lock = threading.Lock()

    def set_available(self, available: bool) -> None:
        """Set the probe result.

        Args:
            available: Whether probe() reports the service as reachable
        """
        self._available = available

    def set_response(self, text: str) -> None:
        """Set the text returned by text generation.

        Args:
            text: Text to return
        """
        self._response_text = text
        self._error = None

    def set_embedding(self, text: str, vector: list[float]) -> None:
        """Set the embedding returned for an exact input text.

        Args:
            text: Input text
            vector: Embedding to return
        """
        self._embeddings[text] = vector

    def set_default_embedding(self, vector: list[float] | None) -> None:
        """Set the embedding returned for texts without an explicit one."""
        self._default_embedding = vector

    def set_error(self, message: str, malformed: bool = False) -> None:
        """Make every generate call fail.

        Args:
            message: Error message
            malformed: Raise MalformedResponse instead of ServiceUnavailable
        """
        self._error = (
            MalformedResponse(message) if malformed else ServiceUnavailable(message)
        )

    def fail_for(self, text: str) -> None:
        """Make embedding requests for one text fail."""
        self._failing_texts.add(text)

    def probe(self) -> bool:
        """Return the scripted availability."""
        with self._lock:
            self._probe_count += 1
        return self._available

    def generate(
        self,
        prompt: str,
        kind: ModelKind = ModelKind.TEXT,
        options: GenerationOptions | None = None,
    ) -> str | list[float]:
        """Return the scripted response for prompt."""
        with self._lock:
            self._prompts.append((kind, prompt))

        if self._error is not None:
            raise self._error

        if kind is ModelKind.EMBEDDING:
            if prompt in self._failing_texts:
                raise ServiceUnavailable(f"Embedding failed for: {prompt[:40]}")
            vector = self._embeddings.get(prompt, self._default_embedding)
            if vector is None:
                raise MalformedResponse(f"No embedding scripted for: {prompt[:40]}")
            return list(vector)

        return self._response_text

    @property
    def probe_count(self) -> int:
        """Get number of probe calls."""
        return self._probe_count

    @property
    def call_count(self) -> int:
        """Get number of generate calls."""
        return len(self._prompts)

    @property
    def prompts(self) -> list[tuple[ModelKind, str]]:
        """Get (kind, prompt) pairs in call order."""
        with self._lock:
            return list(self._prompts)

    def clear(self) -> None:
        """Reset mock state."""
        self._available = True
        self._response_text = "This is a mock response."
        self._embeddings.clear()
        self._default_embedding = None
        self._error = None
        self._failing_texts.clear()
        self._probe_count = 0
        with self._lock:
            self._prompts.clear()


__all__ = ["MockGenerationClient"]
