import json

import pytest

from landing_page_generator import state_storage
from landing_page_generator.config import Settings
from landing_page_generator.fallback import synthesize_content
from landing_page_generator.firestore_state_storage import FirestoreStateStorage
from landing_page_generator.models.form import FormAttributes
from landing_page_generator.state_storage import (
    STORAGE_NAMESPACE,
    InMemoryStateStorage,
    LocalFileStateStorage,
    PersistedState,
    build_state_storage,
)
from landing_page_generator.store import derive_standard_sections


def sample_state() -> PersistedState:
    form = FormAttributes(product_name="Acme", key_features=["A", "B"])
    content = synthesize_content(form)
    return PersistedState(
        form_data=form,
        sections=derive_standard_sections(content),
        generated_content=content,
    )


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data)


class FakeDocument:
    def __init__(self, documents, doc_id):
        self._documents = documents
        self._doc_id = doc_id

    def get(self):
        return FakeSnapshot(self._documents.get(self._doc_id))

    def set(self, data):
        self._documents[self._doc_id] = data


class FakeCollection:
    def __init__(self):
        self.documents = {}

    def document(self, doc_id):
        return FakeDocument(self.documents, doc_id)


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


def test_local_file_storage_round_trip(tmp_path):
    storage = LocalFileStateStorage(base_path=tmp_path / "state")
    state = sample_state()

    assert storage.load(STORAGE_NAMESPACE) is None
    storage.save(STORAGE_NAMESPACE, state)

    document = json.loads((tmp_path / "state" / f"{STORAGE_NAMESPACE}.json").read_text(encoding="utf-8"))
    assert document["formData"]["productName"] == "Acme"
    assert document["generatedContent"]["hero"]["imageUrl"]
    assert storage.load(STORAGE_NAMESPACE) == state


def test_failed_local_save_keeps_previous_document(tmp_path, monkeypatch):
    storage = LocalFileStateStorage(base_path=tmp_path)
    state = sample_state()
    storage.save(STORAGE_NAMESPACE, state)

    def broken_dump(document, fp, **kwargs):
        fp.write('{"formData": {"productName": "Acm')
        raise OSError("disk full")

    monkeypatch.setattr(state_storage.json, "dump", broken_dump)
    updated = state.model_copy(update={"form_data": FormAttributes(product_name="Other")})
    with pytest.raises(OSError, match="disk full"):
        storage.save(STORAGE_NAMESPACE, updated)
    monkeypatch.undo()

    assert storage.load(STORAGE_NAMESPACE) == state
    assert [path.name for path in tmp_path.iterdir()] == [f"{STORAGE_NAMESPACE}.json"]


def test_firestore_storage_round_trip():
    client = FakeFirestoreClient()
    storage = FirestoreStateStorage(client=client)
    state = sample_state()

    assert storage.load(STORAGE_NAMESPACE) is None
    storage.save(STORAGE_NAMESPACE, state)

    stored = client.collections["landing_pages"].documents[STORAGE_NAMESPACE]
    assert "updated_at" in stored
    assert stored["theme"]["brandColor"] == "#3B82F6"
    assert storage.load(STORAGE_NAMESPACE) == state


def test_build_state_storage_selects_backend(tmp_path):
    assert isinstance(build_state_storage(Settings()), InMemoryStateStorage)
    file_storage = build_state_storage(Settings(state_backend="file", state_path=tmp_path))
    assert isinstance(file_storage, LocalFileStateStorage)
