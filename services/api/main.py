from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from landing_page_generator.config import load_settings
from landing_page_generator.gemini_adapter import GeminiAdapter
from landing_page_generator.generator import LandingPageGenerator
from landing_page_generator.logging_config import setup_logging
from landing_page_generator.models.form import FormAttributes
from landing_page_generator.models.generation import GenerationOutcome
from landing_page_generator.models.section import PageSection, PreviewMode
from landing_page_generator.state_storage import build_state_storage
from landing_page_generator.store import LandingPageStore, ThemeUpdate


class CustomSectionRequest(BaseModel):
    description: str = Field(min_length=1)


class PreviewModeRequest(BaseModel):
    mode: PreviewMode


class StateResponse(BaseModel):
    state: dict[str, Any]

    @staticmethod
    def from_store(store: LandingPageStore) -> "StateResponse":
        return StateResponse(state=store.state.model_dump(mode="json", by_alias=True))


class ShareResponse(BaseModel):
    payload: str


# Environment configuration
settings = load_settings()

# Setup logging
setup_logging(environment=settings.environment, project_id=settings.project_id)

app = FastAPI(title="Landing Page Generator API", version="0.1.0")

# In-memory state in dev, file or Firestore storage otherwise
state_storage = build_state_storage(settings)
store = LandingPageStore.restore(state_storage)
completion_service = GeminiAdapter.from_settings(settings)
generator = LandingPageGenerator(store=store, completion_service=completion_service)


@app.get("/v1/state", response_model=StateResponse)
async def get_state() -> StateResponse:
    return StateResponse.from_store(store)


@app.patch("/v1/form", response_model=StateResponse)
async def update_form(payload: FormAttributes) -> StateResponse:
    store.update_form_data(payload)
    return StateResponse.from_store(store)


@app.post("/v1/content:generate", response_model=GenerationOutcome)
async def generate_content() -> GenerationOutcome:
    return await generator.generate()


@app.put("/v1/sections", response_model=StateResponse)
async def replace_sections(sections: list[PageSection]) -> StateResponse:
    store.update_sections(sections)
    return StateResponse.from_store(store)


@app.post("/v1/sections:custom", response_model=PageSection)
async def add_custom_section(request: CustomSectionRequest) -> PageSection:
    try:
        return store.add_custom_section(request.description)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.patch("/v1/theme", response_model=StateResponse)
async def update_theme(update: ThemeUpdate) -> StateResponse:
    try:
        store.update_theme(update)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return StateResponse.from_store(store)


@app.put("/v1/preview-mode", response_model=StateResponse)
async def set_preview_mode(request: PreviewModeRequest) -> StateResponse:
    store.set_preview_mode(request.mode)
    return StateResponse.from_store(store)


@app.get("/v1/share", response_model=ShareResponse)
async def share() -> ShareResponse:
    return ShareResponse(payload=store.generate_share_data())


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok", "ai_available": completion_service.available})
