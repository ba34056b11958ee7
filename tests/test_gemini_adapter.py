import asyncio
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from landing_page_generator import gemini_adapter
from landing_page_generator.config import Settings
from landing_page_generator.errors import CompletionFailed, ServiceUnavailable
from landing_page_generator.gemini_adapter import GeminiAdapter, SamplingConfig


class FakeModels:
    def __init__(self, *, text="{}", error=None):
        self.text = text
        self.error = error
        self.requests = []

    async def generate_content(self, *, model, contents, config=None):
        self.requests.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(models: FakeModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def test_missing_credentials_make_adapter_unavailable(caplog):
    with caplog.at_level("WARNING"):
        adapter = GeminiAdapter()

    assert adapter.available is False
    assert "API key is not set" in caplog.text
    with pytest.raises(ServiceUnavailable) as excinfo:
        asyncio.run(adapter.complete("hello", SamplingConfig()))
    assert "API key" in str(excinfo.value)
    assert excinfo.value.retryable is False
    assert asyncio.run(adapter.check_connection()) is False


def test_vertex_mode_requires_project():
    assert GeminiAdapter(api_key="key", use_vertex_ai=True).available is False


def test_client_is_built_from_credentials(monkeypatch):
    built = []
    monkeypatch.setattr(gemini_adapter.genai, "Client", lambda **kwargs: built.append(kwargs) or object())

    GeminiAdapter(api_key="secret")
    GeminiAdapter(project_id="proj", use_vertex_ai=True, location="us-central1")

    assert built == [
        {"api_key": "secret"},
        {"vertexai": True, "project": "proj", "location": "us-central1"},
    ]


def test_from_settings(monkeypatch):
    built = []
    monkeypatch.setattr(gemini_adapter.genai, "Client", lambda **kwargs: built.append(kwargs) or object())

    adapter = GeminiAdapter.from_settings(Settings(gemini_api_key="k", gemini_model="gemini-test"))

    assert adapter.available is True
    assert adapter.model_name == "gemini-test"
    assert built == [{"api_key": "k"}]


def test_complete_sends_sampling_config():
    models = FakeModels(text='{"hero": {}}')
    adapter = GeminiAdapter(client=fake_client(models), model_name="gemini-test")

    text = asyncio.run(adapter.complete("prompt text", SamplingConfig()))

    assert text == '{"hero": {}}'
    request = models.requests[0]
    assert request["model"] == "gemini-test"
    assert request["contents"] == "prompt text"
    config = request["config"]
    assert config.temperature == 0.9
    assert config.max_output_tokens == 2048
    assert config.top_p == 0.95
    assert config.top_k == 40


def test_vendor_errors_become_completion_failed():
    models = FakeModels(error=RuntimeError("Resource exhausted: quota exceeded"))
    adapter = GeminiAdapter(client=fake_client(models))

    with pytest.raises(CompletionFailed) as excinfo:
        asyncio.run(adapter.complete("prompt", SamplingConfig()))

    assert "quota" in str(excinfo.value)
    assert excinfo.value.retryable is True
    assert len(models.requests) == 1


def test_empty_response_is_a_failed_completion():
    adapter = GeminiAdapter(client=fake_client(FakeModels(text=None)))
    with pytest.raises(CompletionFailed):
        asyncio.run(adapter.complete("prompt", SamplingConfig()))


def test_check_connection_reports_status():
    assert asyncio.run(GeminiAdapter(client=fake_client(FakeModels())).check_connection()) is True
    broken = GeminiAdapter(client=fake_client(FakeModels(error=RuntimeError("down"))))
    assert asyncio.run(broken.check_connection()) is False


def test_sampling_config_validation():
    config = SamplingConfig.model_validate({"temperature": 0.2, "maxOutputTokens": 512, "topP": 0.5, "topK": 10})
    assert (config.max_output_tokens, config.top_p, config.top_k) == (512, 0.5, 10)
    with pytest.raises(ValidationError):
        SamplingConfig(temperature=1.5)
    with pytest.raises(ValidationError):
        SamplingConfig(max_output_tokens=0)
