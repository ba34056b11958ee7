from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from .content import GeneratedContent


class GenerationStatus(str, Enum):
    idle = "IDLE"
    in_flight = "IN_FLIGHT"
    succeeded = "SUCCEEDED"
    failed_with_fallback = "FAILED_WITH_FALLBACK"


class GenerationOutcome(BaseModel):
    generation_id: str
    status: GenerationStatus
    content: GeneratedContent
    source: Literal["model", "fallback"]
    error: str | None = None
    notice: str | None = None


__all__ = ["GenerationStatus", "GenerationOutcome"]
