from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .config import Settings
from .models.content import GeneratedContent
from .models.form import FormAttributes
from .models.section import PageSection, ThemeConfig


STORAGE_NAMESPACE = "landing-page-generator"


class PersistedState(BaseModel):
    """The part of the application state that survives a restart."""

    model_config = ConfigDict(populate_by_name=True)

    form_data: FormAttributes = Field(default_factory=FormAttributes, alias="formData")
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    sections: Sequence[PageSection] = Field(default_factory=list)
    generated_content: GeneratedContent | None = Field(default=None, alias="generatedContent")

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class StateStorage(Protocol):
    def load(self, namespace: str) -> PersistedState | None:
        ...

    def save(self, namespace: str, state: PersistedState) -> None:
        ...


class InMemoryStateStorage:
    def __init__(self) -> None:
        self._documents: Dict[str, dict] = {}

    def load(self, namespace: str) -> PersistedState | None:
        document = self._documents.get(namespace)
        if document is None:
            return None
        return PersistedState.model_validate(document)

    def save(self, namespace: str, state: PersistedState) -> None:
        self._documents[namespace] = state.to_document()


class LocalFileStateStorage:
    """Stores each namespace as ``<base_path>/<namespace>.json``."""

    def __init__(self, *, base_path: Path) -> None:
        self._base_path = base_path

    def _path(self, namespace: str) -> Path:
        return self._base_path / f"{namespace.replace('/', '-')}.json"

    def load(self, namespace: str) -> PersistedState | None:
        file_path = self._path(namespace)
        if not file_path.exists():
            return None
        with file_path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
        return PersistedState.model_validate(data)

    def save(self, namespace: str, state: PersistedState) -> None:
        file_path = self._path(namespace)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        # Swapped in whole; a failed dump leaves the previous document in place.
        fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(state.to_document(), fp, ensure_ascii=False, indent=2)
            os.replace(tmp_name, file_path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def build_state_storage(settings: Settings) -> StateStorage:
    if settings.state_backend == "firestore":
        from .firestore_state_storage import FirestoreStateStorage

        return FirestoreStateStorage(project_id=settings.project_id)
    if settings.state_backend == "file":
        return LocalFileStateStorage(base_path=settings.state_path.resolve())
    return InMemoryStateStorage()


__all__ = [
    "STORAGE_NAMESPACE",
    "PersistedState",
    "StateStorage",
    "InMemoryStateStorage",
    "LocalFileStateStorage",
    "build_state_storage",
]
