"""Ollama generation client.

Uses a local Ollama server for text generation and embeddings. Every call,
including the liveness probe, shares one bounded timeout.
"""

import logging
import time
from typing import Any

import httpx
import ollama

from .errors import MalformedResponse, ServiceUnavailable
from .model import GenerationOptions, ModelKind

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:11434"
DEFAULT_TEXT_MODEL = "llama2"
DEFAULT_EMBEDDING_MODEL = "nomic-embed-text"
DEFAULT_TIMEOUT_SECONDS = 10.0


class OllamaGenerationClient:
    """Generation client backed by the Ollama HTTP API.

    Text requests go to the generate endpoint and embeddings to the embed
    endpoint. Transport errors, timeouts and non-success statuses are
    reported as ServiceUnavailable; unexpected payloads as
    MalformedResponse. Nothing is retried.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        text_model: str = DEFAULT_TEXT_MODEL,
        embedding_model: str = DEFAULT_EMBEDDING_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: float = 0.3,
        max_tokens: int = 150,
    ) -> None:
        """Initialize Ollama generation client.

        Args:
            host: Ollama server URL
            text_model: Model used for text generation
            embedding_model: Model used for embeddings
            timeout: Timeout in seconds for every request, probe included
            temperature: Default sampling temperature
            max_tokens: Default maximum tokens to generate
        """
        self._host = host
        self._text_model = text_model
        self._embedding_model = embedding_model
        self._timeout = timeout
        self._temperature = temperature
        self._max_tokens = max_tokens

        self._client = ollama.Client(host=host, timeout=timeout)

        logger.info(
            f"Ollama client initialized at {host} "
            f"(text={text_model}, embedding={embedding_model}, timeout={timeout}s)"
        )

    @property
    def host(self) -> str:
        """Get server URL."""
        return self._host

    @property
    def timeout(self) -> float:
        """Get request timeout in seconds."""
        return self._timeout

    def probe(self) -> bool:
        """Check if the Ollama server answers within the timeout."""
        try:
            self._client.list()
            return True
        except Exception as e:
            logger.debug(f"Ollama probe failed: {e}")
            return False

    def generate(
        self,
        prompt: str,
        kind: ModelKind = ModelKind.TEXT,
        options: GenerationOptions | None = None,
    ) -> str | list[float]:
        """Generate text or an embedding for prompt.

        Args:
            prompt: Prompt text, or text to embed
            kind: Target model kind
            options: Sampling parameters for text generation

        Returns:
            Stripped response text, or the embedding vector

        Raises:
            ServiceUnavailable: On transport errors, timeouts or error statuses
            MalformedResponse: If the payload is not the expected shape
        """
        start_time = time.time()

        if kind is ModelKind.EMBEDDING:
            response = self._call(
                self._client.embed, model=self._embedding_model, input=prompt
            )
            result: str | list[float] = _read_embedding(response)
        else:
            options = options or GenerationOptions()
            response = self._call(
                self._client.generate,
                model=self._text_model,
                prompt=prompt,
                stream=False,
                options={
                    "temperature": (
                        options.temperature
                        if options.temperature is not None
                        else self._temperature
                    ),
                    "num_predict": options.max_tokens or self._max_tokens,
                },
            )
            result = _read_text(response)

        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"Ollama {kind.value} request completed in {latency_ms}ms")

        return result

    @staticmethod
    def _call(method: Any, **kwargs: Any) -> Any:
        try:
            return method(**kwargs)
        except ollama.ResponseError as e:
            raise ServiceUnavailable(
                f"Ollama returned an error: {e.error}", status_code=e.status_code
            ) from e
        except httpx.TimeoutException as e:
            raise ServiceUnavailable(f"Ollama request timed out: {e}") from e
        except (httpx.HTTPError, ollama.RequestError, OSError) as e:
            raise ServiceUnavailable(f"Ollama request failed: {e}") from e


def _read_text(response: Any) -> str:
    """Extract generated text from a generate response."""
    try:
        text = response.get("response")
    except AttributeError as e:
        raise MalformedResponse(f"Unexpected response type: {type(response)}") from e

    if not isinstance(text, str):
        raise MalformedResponse(f"Expected text response, got {type(text).__name__}")

    text = text.strip()
    if not text:
        raise MalformedResponse("Empty text response")
    return text


def _read_embedding(response: Any) -> list[float]:
    """Extract the first embedding vector from an embed response."""
    try:
        embeddings = response.get("embeddings")
    except AttributeError as e:
        raise MalformedResponse(f"Unexpected response type: {type(response)}") from e

    if not embeddings or not isinstance(embeddings, (list, tuple)):
        raise MalformedResponse("Response contains no embeddings")

    vector = embeddings[0]
    if not isinstance(vector, (list, tuple)) or not vector:
        raise MalformedResponse("Embedding is not a non-empty vector")

    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in vector):
        raise MalformedResponse("Embedding contains non-numeric values")

    return [float(v) for v in vector]


__all__ = [
    "DEFAULT_EMBEDDING_MODEL",
    "DEFAULT_HOST",
    "DEFAULT_TEXT_MODEL",
    "DEFAULT_TIMEOUT_SECONDS",
    "OllamaGenerationClient",
]
