from __future__ import annotations

import logging
import uuid

from .errors import CompletionFailed, GenerationError, MalformedResponse, ServiceUnavailable
from .fallback import synthesize_content
from .gemini_adapter import CompletionService, SamplingConfig
from .logging_config import get_generation_id, set_generation_id
from .models.generation import GenerationOutcome, GenerationStatus
from .normalizer import normalize_response
from .notifications import (
    LOADING_MESSAGE,
    SUCCESS_MESSAGE,
    LoggingNotifier,
    Notification,
    Notifier,
    failure_message,
)
from .prompt_builder import build_prompt
from .store import LandingPageStore

logger = logging.getLogger(__name__)


class LandingPageGenerator:
    """Runs prompt building, completion and normalization for the store.

    ``generate`` always publishes complete content: model output when the
    completion parses, fallback content otherwise. Concurrent calls are not
    deduplicated; each publishes its own result and the last one wins.
    """

    def __init__(
        self,
        *,
        store: LandingPageStore,
        completion_service: CompletionService,
        notifier: Notifier | None = None,
        sampling: SamplingConfig | None = None,
    ) -> None:
        self._store = store
        self._completion_service = completion_service
        self._notifier = notifier or LoggingNotifier()
        self._sampling = sampling or SamplingConfig()

    async def generate(self) -> GenerationOutcome:
        generation_id = uuid.uuid4().hex[:12]
        previous_id = get_generation_id()
        set_generation_id(generation_id)
        try:
            return await self._run(generation_id)
        finally:
            set_generation_id(previous_id)

    async def _run(self, generation_id: str) -> GenerationOutcome:
        store = self._store
        attrs = store.form_data

        store.set_is_generating(True)
        store.set_generation_status(GenerationStatus.in_flight)
        self._notifier.notify(Notification(kind="loading", message=LOADING_MESSAGE))

        try:
            try:
                prompt = build_prompt(attrs)
                logger.info(
                    "Requesting landing page copy",
                    extra={"product_name": attrs.product_name, "prompt_length": len(prompt)},
                )
                raw_text = await self._completion_service.complete(prompt, self._sampling)
                content = normalize_response(raw_text, attrs)
            except GenerationError as exc:
                self._log_failure(exc)
                outcome = GenerationOutcome(
                    generation_id=generation_id,
                    status=GenerationStatus.failed_with_fallback,
                    content=synthesize_content(attrs),
                    source="fallback",
                    error=str(exc),
                    notice=failure_message(exc),
                )
            else:
                outcome = GenerationOutcome(
                    generation_id=generation_id,
                    status=GenerationStatus.succeeded,
                    content=content,
                    source="model",
                    notice=SUCCESS_MESSAGE,
                )

            store.set_generated_content(outcome.content)
            store.set_generation_status(outcome.status)
        finally:
            store.set_is_generating(False)

        kind = "success" if outcome.source == "model" else "error"
        self._notifier.notify(Notification(kind=kind, message=outcome.notice))
        logger.info(
            "Published landing page content",
            extra={"status": outcome.status.value, "source": outcome.source},
        )
        return outcome

    def _log_failure(self, exc: GenerationError) -> None:
        if isinstance(exc, ServiceUnavailable):
            # Already warned once when the adapter was built.
            logger.debug("Completion service unavailable, using fallback content")
        elif isinstance(exc, MalformedResponse):
            logger.warning(
                "Failed to parse model response, using fallback content",
                exc_info=True,
                extra={"response": exc.raw_text},
            )
        elif isinstance(exc, CompletionFailed):
            logger.error(
                "Gemini API error, using fallback content",
                exc_info=True,
                extra={"error": str(exc)},
            )
        else:
            logger.error("Content generation failed", exc_info=True)


__all__ = ["LandingPageGenerator"]
