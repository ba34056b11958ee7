from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for failures on the content generation path."""

    retryable = False


class ServiceUnavailable(GenerationError):
    """No credential was configured when the completion client started."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Gemini API key is not configured. Please add GEMINI_API_KEY to your .env file."
        )


class CompletionFailed(GenerationError):
    """A single completion call failed (transport, quota or vendor error)."""

    retryable = True


class MalformedResponse(GenerationError):
    """The completion succeeded but its text could not be parsed."""

    def __init__(self, message: str, *, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ExporterNotConfigured(RuntimeError):
    pass


__all__ = [
    "GenerationError",
    "ServiceUnavailable",
    "CompletionFailed",
    "MalformedResponse",
    "ExporterNotConfigured",
]
