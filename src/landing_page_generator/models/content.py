from __future__ import annotations

from typing import Annotated, Sequence

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

FEATURE_COUNT = 4
TESTIMONIAL_COUNT = 3

# Non-blank, kept verbatim.
Text = Annotated[str, StringConstraints(min_length=1, pattern=r"\S")]


class _ContentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HeroContent(_ContentModel):
    headline: Text
    subhead: Text
    image_url: Text = Field(alias="imageUrl")


class AboutContent(_ContentModel):
    title: Text
    content: Text


class Feature(_ContentModel):
    id: Text
    title: Text
    description: Text
    icon: Text


class Testimonial(_ContentModel):
    id: Text
    name: Text
    role: Text
    company: Text
    quote: Text
    avatar: Text


def _require_unique_ids(items: Sequence[Feature] | Sequence[Testimonial]) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate id: {item.id}")
        seen.add(item.id)


class GeneratedContent(_ContentModel):
    """The fixed landing-page schema. Always fully populated."""

    hero: HeroContent
    about: AboutContent
    features: list[Feature] = Field(min_length=FEATURE_COUNT, max_length=FEATURE_COUNT)
    testimonials: list[Testimonial] = Field(
        min_length=TESTIMONIAL_COUNT, max_length=TESTIMONIAL_COUNT
    )

    @field_validator("features", "testimonials")
    @classmethod
    def _unique_ids(cls, items):
        _require_unique_ids(items)
        return items


__all__ = [
    "GeneratedContent",
    "HeroContent",
    "AboutContent",
    "Feature",
    "Testimonial",
    "FEATURE_COUNT",
    "TESTIMONIAL_COUNT",
]
