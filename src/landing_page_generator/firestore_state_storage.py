from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from google.cloud import firestore

from .state_storage import PersistedState

logger = logging.getLogger(__name__)


class FirestoreStateStorage:
    """Firestore-backed state storage, one document per namespace."""

    COLLECTION_NAME = "landing_pages"

    def __init__(self, project_id: str | None = None, *, client: Any | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def load(self, namespace: str) -> PersistedState | None:
        """Retrieve the persisted state for a namespace."""
        doc = self._collection.document(namespace).get()

        if not doc.exists:
            return None

        return self._from_firestore_dict(doc.to_dict())

    def save(self, namespace: str, state: PersistedState) -> None:
        """Overwrite the persisted state for a namespace."""
        doc_ref = self._collection.document(namespace)
        doc_ref.set(self._to_firestore_dict(state))

        logger.debug(
            "Saved state",
            extra={"namespace": namespace, "sections_count": len(state.sections)},
        )

    def _to_firestore_dict(self, state: PersistedState) -> dict:
        data = state.to_document()
        data["updated_at"] = datetime.now(timezone.utc)
        return data

    def _from_firestore_dict(self, data: dict) -> PersistedState:
        data = dict(data)
        data.pop("updated_at", None)
        return PersistedState.model_validate(data)


__all__ = ["FirestoreStateStorage"]
