from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .form import DEFAULT_BRAND_COLOR, HEX_COLOR_PATTERN


class SectionType(str, Enum):
    hero = "hero"
    about = "about"
    features = "features"
    testimonials = "testimonials"
    custom = "custom"


class PageSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: SectionType
    title: str
    order: int
    content: Any = None
    is_visible: bool = Field(default=True, alias="isVisible")


class ThemeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: Literal["light", "dark"] = "light"
    brand_color: str = Field(default=DEFAULT_BRAND_COLOR, alias="brandColor", pattern=HEX_COLOR_PATTERN)
    preset: str = "default"


PreviewMode = Literal["desktop", "tablet", "mobile"]


__all__ = ["PageSection", "SectionType", "ThemeConfig", "PreviewMode"]
