"""Error types for the generation client.

Both failures are recoverable: callers route them to a local fallback.
"""


class GenerationError(Exception):
    """Base exception for generation service errors."""

    pass


class ServiceUnavailable(GenerationError):
    """Raised when the service is unreachable, errors, or times out."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize unavailable error.

        Args:
            message: Error message.
            status_code: HTTP status code if the service answered.
        """
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(GenerationError):
    """Raised when a response cannot be read as the expected shape."""

    pass


__all__ = [
    "GenerationError",
    "MalformedResponse",
    "ServiceUnavailable",
]
