from __future__ import annotations

import logging
from typing import Literal, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)

GENERATE_KEY = "generate"

LOADING_MESSAGE = "AI is generating your landing page..."
SUCCESS_MESSAGE = "Landing page generated successfully!"
MISSING_KEY_MESSAGE = "Gemini API key is not configured. Please check your .env file."
QUOTA_MESSAGE = "API quota exceeded. Please try again later."
GENERIC_FAILURE_MESSAGE = "Failed to generate content. Using fallback template."


class Notification(BaseModel):
    kind: Literal["loading", "success", "error"]
    message: str
    key: str = GENERATE_KEY


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Notifier used when no UI is attached."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.kind == "error" else logging.INFO
        logger.log(level, notification.message, extra={"notification_key": notification.key})


def failure_message(error: BaseException) -> str:
    """Pick the user-facing text for a failed generation."""
    description = str(error)
    if "API key" in description:
        return MISSING_KEY_MESSAGE
    if "quota" in description:
        return QUOTA_MESSAGE
    return GENERIC_FAILURE_MESSAGE


__all__ = [
    "Notification",
    "Notifier",
    "LoggingNotifier",
    "failure_message",
    "LOADING_MESSAGE",
    "SUCCESS_MESSAGE",
]
