from __future__ import annotations

import logging
from typing import Any, Protocol

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings
from .errors import CompletionFailed, ServiceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"


class SamplingConfig(BaseModel):
    """Generation parameters sent with every completion."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(default=0.9, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=2048, gt=0, alias="maxOutputTokens")
    top_p: float = Field(default=0.95, ge=0.0, le=1.0, alias="topP")
    top_k: int = Field(default=40, gt=0, alias="topK")


class CompletionService(Protocol):
    async def complete(self, prompt: str, config: SamplingConfig) -> str:
        ...


class GeminiAdapter:
    """Adapter for Gemini models (Developer API key or Vertex AI)."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        project_id: str | None = None,
        use_vertex_ai: bool = False,
        location: str = "asia-northeast1",
        model_name: str = DEFAULT_MODEL_NAME,
        client: Any | None = None,
    ) -> None:
        """Initialize the adapter.

        Configuration is checked once, here. Without an API key (or a project
        ID in Vertex AI mode) the adapter stays unavailable for its lifetime
        and every call raises ``ServiceUnavailable``.

        Args:
            api_key: Gemini Developer API key
            project_id: GCP project ID, used in Vertex AI mode
            use_vertex_ai: Route requests through Vertex AI instead of the API key
            location: Vertex AI location
            model_name: Model name (e.g., "gemini-2.5-flash")
            client: Pre-built ``genai.Client``
        """
        self.model_name = model_name
        self.mode = "vertex" if use_vertex_ai else "api_key"

        if client is not None:
            self._client = client
        elif use_vertex_ai and project_id:
            self._client = genai.Client(vertexai=True, project=project_id, location=location)
        elif not use_vertex_ai and api_key:
            self._client = genai.Client(api_key=api_key)
        else:
            self._client = None
            logger.warning(
                "Gemini API key is not set. AI generation will use fallback content.",
                extra={"mode": self.mode},
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiAdapter":
        return cls(
            api_key=settings.gemini_api_key,
            project_id=settings.project_id,
            use_vertex_ai=settings.use_vertex_ai,
            location=settings.vertex_location,
            model_name=settings.gemini_model,
        )

    @property
    def available(self) -> bool:
        return self._client is not None

    async def complete(self, prompt: str, config: SamplingConfig | None = None) -> str:
        """Generate text for ``prompt``.

        Args:
            prompt: Input prompt
            config: Sampling parameters

        Returns:
            Generated text

        Raises:
            ServiceUnavailable: the adapter was built without credentials
            CompletionFailed: the call failed or returned no text
        """
        if self._client is None:
            raise ServiceUnavailable()

        config = config or SamplingConfig()
        generation_config = types.GenerateContentConfig(
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
            top_p=config.top_p,
            top_k=config.top_k,
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=generation_config,
            )
            generated_text = response.text
        except Exception as exc:
            raise CompletionFailed(str(exc)) from exc

        if not generated_text:
            raise CompletionFailed("Gemini returned an empty response")

        logger.info(
            "Generated content with Gemini",
            extra={
                "model": self.model_name,
                "temperature": config.temperature,
                "input_length": len(prompt),
                "output_length": len(generated_text),
            },
        )

        return generated_text

    async def check_connection(self) -> bool:
        """Send a trivial prompt to confirm the credentials work."""
        if self._client is None:
            logger.error("Gemini API not configured")
            return False

        try:
            await self._client.aio.models.generate_content(model=self.model_name, contents="Hello")
        except Exception:
            logger.error("Gemini API connection failed", exc_info=True)
            return False

        logger.info("Gemini API connection successful", extra={"model": self.model_name})
        return True


__all__ = ["GeminiAdapter", "SamplingConfig", "CompletionService", "DEFAULT_MODEL_NAME"]
