from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, List, Mapping, Sequence, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .collaborators import (
    ExportRequest,
    HtmlExporter,
    ShareEncoder,
    ShareRequest,
    encode_share_payload,
)
from .dictionaries import STANDARD_SECTIONS
from .errors import ExporterNotConfigured
from .models.content import GeneratedContent
from .models.form import HEX_COLOR_PATTERN, FormAttributes
from .models.generation import GenerationStatus
from .models.section import PageSection, PreviewMode, SectionType, ThemeConfig
from .state_storage import STORAGE_NAMESPACE, PersistedState, StateStorage

logger = logging.getLogger(__name__)

PREVIEW_MODES = frozenset(get_args(PreviewMode))

_PERSISTED_FIELDS = frozenset({"form_data", "theme", "sections", "generated_content"})


class AppState(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    current_step: int = 0
    form_data: FormAttributes = Field(default_factory=FormAttributes)
    is_generating: bool = False
    generation_status: GenerationStatus = GenerationStatus.idle
    generated_content: GeneratedContent | None = None
    sections: List[PageSection] = Field(default_factory=list)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    preview_mode: PreviewMode = "desktop"


class ThemeUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: str | None = Field(default=None, pattern=r"^(light|dark)$")
    brand_color: str | None = Field(default=None, alias="brandColor", pattern=HEX_COLOR_PATTERN)
    preset: str | None = None


Listener = Callable[[AppState], None]


def derive_standard_sections(content: GeneratedContent) -> list[PageSection]:
    payloads: dict[str, Any] = {
        "hero": content.hero.model_dump(by_alias=True),
        "about": content.about.model_dump(by_alias=True),
        "features": [feature.model_dump(by_alias=True) for feature in content.features],
        "testimonials": [item.model_dump(by_alias=True) for item in content.testimonials],
    }
    return [
        PageSection(
            id=definition.key,
            type=definition.type,
            title=definition.title,
            order=definition.order,
            content=payloads[definition.key],
            is_visible=True,
        )
        for definition in STANDARD_SECTIONS
    ]


class LandingPageStore:
    """Owned application state; the action methods are the only writers.

    Every mutation replaces the state snapshot, writes the persisted subset to
    storage (when one is attached) and then calls the subscribers.
    """

    def __init__(
        self,
        *,
        state: AppState | None = None,
        storage: StateStorage | None = None,
        namespace: str = STORAGE_NAMESPACE,
        exporter: HtmlExporter | None = None,
        share_encoder: ShareEncoder = encode_share_payload,
    ) -> None:
        self._state = state or AppState()
        self._storage = storage
        self._namespace = namespace
        self._exporter = exporter
        self._share_encoder = share_encoder
        self._listeners: list[Listener] = []

    @classmethod
    def restore(
        cls,
        storage: StateStorage,
        *,
        namespace: str = STORAGE_NAMESPACE,
        **kwargs: Any,
    ) -> "LandingPageStore":
        persisted = storage.load(namespace)
        state = AppState()
        if persisted is not None:
            state = AppState(
                form_data=persisted.form_data,
                theme=persisted.theme,
                sections=list(persisted.sections),
                generated_content=persisted.generated_content,
            )
            logger.info(
                "Restored persisted state",
                extra={"namespace": namespace, "sections_count": len(state.sections)},
            )
        return cls(state=state, storage=storage, namespace=namespace, **kwargs)

    # Read access

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def form_data(self) -> FormAttributes:
        return self._state.form_data

    @property
    def generated_content(self) -> GeneratedContent | None:
        return self._state.generated_content

    @property
    def sections(self) -> list[PageSection]:
        return list(self._state.sections)

    @property
    def theme(self) -> ThemeConfig:
        return self._state.theme

    @property
    def is_generating(self) -> bool:
        return self._state.is_generating

    def persisted_state(self) -> PersistedState:
        return PersistedState(
            form_data=self._state.form_data,
            theme=self._state.theme,
            sections=list(self._state.sections),
            generated_content=self._state.generated_content,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Actions

    def set_current_step(self, step: int) -> None:
        if step < 0:
            raise ValueError("step must be non-negative")
        self._set(current_step=step)

    def update_form_data(self, data: FormAttributes | Mapping[str, Any]) -> None:
        update = data if isinstance(data, FormAttributes) else FormAttributes.model_validate(data)
        self._set(form_data=self._state.form_data.merge(update))

    def set_is_generating(self, generating: bool) -> None:
        self._set(is_generating=generating)

    def set_generation_status(self, status: GenerationStatus) -> None:
        self._set(generation_status=status)

    def set_generated_content(self, content: GeneratedContent) -> None:
        """Publish content and rebuild the standard sections around it."""
        custom = [s for s in self._state.sections if s.type == SectionType.custom]
        sections = derive_standard_sections(content) + custom
        self._set(
            generated_content=content,
            sections=sorted(sections, key=lambda section: section.order),
        )

    def update_sections(self, sections: Sequence[PageSection | Mapping[str, Any]]) -> None:
        self._set(sections=[PageSection.model_validate(section) for section in sections])

    def update_theme(self, update: ThemeUpdate | Mapping[str, Any]) -> None:
        if not isinstance(update, ThemeUpdate):
            update = ThemeUpdate.model_validate(update)
        merged = self._state.theme.model_dump()
        merged.update(update.model_dump(exclude_unset=True, exclude_none=True))
        self._set(theme=ThemeConfig.model_validate(merged))

    def set_preview_mode(self, mode: PreviewMode) -> None:
        if mode not in PREVIEW_MODES:
            raise ValueError(f"unknown preview mode: {mode}")
        self._set(preview_mode=mode)

    def add_custom_section(self, description: str) -> PageSection:
        description = description.strip()
        if not description:
            raise ValueError("custom section description must not be empty")

        sections = self._state.sections
        # Custom sections always sort after the standard block.
        last_order = max(
            (section.order for section in sections), default=len(STANDARD_SECTIONS) - 1
        )
        section = PageSection(
            id=f"custom-{uuid.uuid4().hex[:8]}",
            type=SectionType.custom,
            title=description,
            order=max(last_order, len(STANDARD_SECTIONS) - 1) + 1,
            content={
                "title": description,
                "content": (
                    f'This is a custom section: "{description}". '
                    "You can edit this content to match your needs."
                ),
            },
            is_visible=True,
        )
        self._set(sections=[*sections, section])
        return section

    def export_html(self, *, include_styles: bool = True, include_scripts: bool = True) -> str:
        if self._exporter is None:
            raise ExporterNotConfigured("No HTML exporter configured")
        return self._exporter(
            ExportRequest(
                sections=self.sections,
                theme=self._state.theme,
                form_data=self._state.form_data,
                include_styles=include_styles,
                include_scripts=include_scripts,
            )
        )

    def generate_share_data(self) -> str:
        return self._share_encoder(
            ShareRequest(
                sections=self.sections,
                theme=self._state.theme,
                form_data=self._state.form_data,
            )
        )

    def _set(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        if self._storage is not None and _PERSISTED_FIELDS.intersection(changes):
            self._storage.save(self._namespace, self.persisted_state())
        for listener in list(self._listeners):
            listener(self._state)


__all__ = ["LandingPageStore", "AppState", "ThemeUpdate", "derive_standard_sections"]
