from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dictionaries import (
    HERO_IMAGE_URL,
    REPAIR_DEFAULTS,
    feature_icon,
    feature_id,
    testimonial_avatar,
    testimonial_id,
)
from .errors import MalformedResponse
from .fallback import default_testimonials, synthesize_content, synthesize_features
from .models.content import (
    FEATURE_COUNT,
    TESTIMONIAL_COUNT,
    AboutContent,
    Feature,
    GeneratedContent,
    HeroContent,
    Testimonial,
)
from .models.form import FormAttributes

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w-]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


class _Draft(BaseModel):
    """Lenient decoding: anything but a non-blank string becomes ``None``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _keep_text_only(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return {}
        return {key: _optional_text(value) for key, value in data.items()}


class HeroDraft(_Draft):
    headline: str | None = None
    subhead: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")


class AboutDraft(_Draft):
    title: str | None = None
    content: str | None = None


class FeatureDraft(_Draft):
    id: str | None = None
    title: str | None = None
    description: str | None = None
    icon: str | None = None


class TestimonialDraft(_Draft):
    id: str | None = None
    name: str | None = None
    role: str | None = None
    company: str | None = None
    quote: str | None = None
    avatar: str | None = None


def _entries(value: Any) -> list[Any] | None:
    if not isinstance(value, list):
        return None
    return [item if isinstance(item, Mapping) else {} for item in value]


class ContentDraft(BaseModel):
    hero: HeroDraft = Field(default_factory=HeroDraft)
    about: AboutDraft = Field(default_factory=AboutDraft)
    features: list[FeatureDraft] | None = None
    testimonials: list[TestimonialDraft] | None = None

    @model_validator(mode="before")
    @classmethod
    def _shape(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return {}
        return {
            "hero": data.get("hero") if isinstance(data.get("hero"), Mapping) else {},
            "about": data.get("about") if isinstance(data.get("about"), Mapping) else {},
            "features": _entries(data.get("features")),
            "testimonials": _entries(data.get("testimonials")),
        }


def unwrap_fenced(text: str) -> str:
    """Strip a markdown code fence the model may wrap its JSON in."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_response(text: str) -> dict[str, Any]:
    cleaned = unwrap_fenced(text)
    try:
        parsed = json.loads(cleaned)
    # Oversized integer literals raise a plain ValueError, deep nesting a RecursionError.
    except (ValueError, RecursionError) as exc:
        raise MalformedResponse(f"Invalid JSON response: {exc}", raw_text=text) from exc
    if not isinstance(parsed, dict):
        raise MalformedResponse(
            f"Expected a JSON object, got {type(parsed).__name__}", raw_text=text
        )
    return parsed


def decode_content(parsed: Mapping[str, Any]) -> ContentDraft:
    return ContentDraft.model_validate(parsed)


class _Repairs:
    def __init__(self) -> None:
        self.fields: list[str] = []

    def pick(self, value: str | None, default: str, field: str) -> str:
        if value is not None:
            return value
        self.fields.append(field)
        return default


def _unique_id(candidate: str | None, positional: str, used: set[str]) -> str:
    for option in (candidate, positional):
        if option and option not in used:
            used.add(option)
            return option
    suffix = 2
    while f"{positional}-{suffix}" in used:
        suffix += 1
    used.add(f"{positional}-{suffix}")
    return f"{positional}-{suffix}"


def repair_content(draft: ContentDraft, attrs: FormAttributes) -> GeneratedContent:
    """Fill every missing field of ``draft`` with its named default."""
    resolved = attrs.resolve()
    repairs = _Repairs()

    hero = HeroContent(
        headline=repairs.pick(
            draft.hero.headline,
            REPAIR_DEFAULTS["hero.headline"].format(industry=resolved.industry),
            "hero.headline",
        ),
        subhead=repairs.pick(draft.hero.subhead, REPAIR_DEFAULTS["hero.subhead"], "hero.subhead"),
        image_url=repairs.pick(draft.hero.image_url, HERO_IMAGE_URL, "hero.imageUrl"),
    )
    about = AboutContent(
        title=repairs.pick(
            draft.about.title,
            REPAIR_DEFAULTS["about.title"].format(product_name=resolved.product_name),
            "about.title",
        ),
        content=repairs.pick(draft.about.content, REPAIR_DEFAULTS["about.content"], "about.content"),
    )

    if draft.features is None or len(draft.features) < FEATURE_COUNT:
        repairs.fields.append("features")
        features = synthesize_features(attrs)
    else:
        features = _repair_features(draft.features[:FEATURE_COUNT], repairs)

    if draft.testimonials is None or len(draft.testimonials) < TESTIMONIAL_COUNT:
        repairs.fields.append("testimonials")
        testimonials = default_testimonials()
    else:
        testimonials = _repair_testimonials(draft.testimonials[:TESTIMONIAL_COUNT], repairs)

    if repairs.fields:
        logger.debug("Repaired model response fields", extra={"fields": repairs.fields})

    return GeneratedContent(hero=hero, about=about, features=features, testimonials=testimonials)


def _repair_features(drafts: list[FeatureDraft], repairs: _Repairs) -> list[Feature]:
    used: set[str] = set()
    features: list[Feature] = []
    for position, draft in enumerate(drafts, start=1):
        prefix = f"features[{position - 1}]"
        if draft.id is None:
            repairs.fields.append(f"{prefix}.id")
        features.append(
            Feature(
                id=_unique_id(draft.id, feature_id(position), used),
                title=repairs.pick(
                    draft.title,
                    REPAIR_DEFAULTS["feature.title"].format(position=position),
                    f"{prefix}.title",
                ),
                description=repairs.pick(
                    draft.description,
                    REPAIR_DEFAULTS["feature.description"],
                    f"{prefix}.description",
                ),
                icon=repairs.pick(draft.icon, feature_icon(position), f"{prefix}.icon"),
            )
        )
    return features


def _repair_testimonials(
    drafts: list[TestimonialDraft], repairs: _Repairs
) -> list[Testimonial]:
    used: set[str] = set()
    testimonials: list[Testimonial] = []
    for position, draft in enumerate(drafts, start=1):
        prefix = f"testimonials[{position - 1}]"
        if draft.id is None:
            repairs.fields.append(f"{prefix}.id")
        testimonials.append(
            Testimonial(
                id=_unique_id(draft.id, testimonial_id(position), used),
                name=repairs.pick(draft.name, REPAIR_DEFAULTS["testimonial.name"], f"{prefix}.name"),
                role=repairs.pick(draft.role, REPAIR_DEFAULTS["testimonial.role"], f"{prefix}.role"),
                company=repairs.pick(
                    draft.company, REPAIR_DEFAULTS["testimonial.company"], f"{prefix}.company"
                ),
                quote=repairs.pick(
                    draft.quote, REPAIR_DEFAULTS["testimonial.quote"], f"{prefix}.quote"
                ),
                avatar=repairs.pick(draft.avatar, testimonial_avatar(position), f"{prefix}.avatar"),
            )
        )
    return testimonials


def normalize_response(text: str, attrs: FormAttributes) -> GeneratedContent:
    """Turn raw completion text into valid content.

    Raises:
        MalformedResponse: if the text is not a JSON object.
    """
    return repair_content(decode_content(parse_response(text)), attrs)


def normalize_or_fallback(text: str, attrs: FormAttributes) -> GeneratedContent:
    try:
        return normalize_response(text, attrs)
    except MalformedResponse:
        logger.warning(
            "Failed to parse model response, using fallback content",
            exc_info=True,
            extra={"response": text},
        )
        return synthesize_content(attrs)


__all__ = [
    "unwrap_fenced",
    "parse_response",
    "decode_content",
    "repair_content",
    "normalize_response",
    "normalize_or_fallback",
    "ContentDraft",
]
