from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from google.cloud import secretmanager
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

GEMINI_API_KEY_SECRET = "gemini-api-key"


class Settings(BaseModel):
    environment: str = "dev"
    project_id: str | None = None
    gemini_api_key: str | None = Field(default=None, repr=False)
    gemini_model: str = "gemini-2.5-flash"
    use_vertex_ai: bool = False
    vertex_location: str = "asia-northeast1"
    state_backend: Literal["memory", "file", "firestore"] = "memory"
    state_path: Path = Path("data/state")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_settings(*, use_secret_manager: bool = True) -> Settings:
    """Read settings from the environment (and a ``.env`` file if present)."""
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path)

    settings = Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        project_id=os.getenv("PROJECT_ID") or None,
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        use_vertex_ai=_env_flag("USE_VERTEX_AI"),
        vertex_location=os.getenv("VERTEX_LOCATION", "asia-northeast1"),
        state_backend=os.getenv("STATE_BACKEND", "memory"),
        state_path=Path(os.getenv("STATE_PATH", "data/state")),
    )

    if (
        use_secret_manager
        and not settings.gemini_api_key
        and not settings.use_vertex_ai
        and settings.project_id
    ):
        settings.gemini_api_key = get_secret(settings.project_id, GEMINI_API_KEY_SECRET)

    return settings


def get_secret(project_id: str, secret_id: str) -> str | None:
    """Fetch secret from Secret Manager.

    Args:
        project_id: GCP project ID
        secret_id: Secret ID

    Returns:
        Secret value or None if not found
    """
    try:
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(name=name)
        return response.payload.data.decode("UTF-8")
    except Exception as exc:
        logger.warning(
            f"Failed to fetch secret {secret_id}: {exc}",
            exc_info=True,
        )
        return None


__all__ = ["Settings", "load_settings", "get_secret"]
