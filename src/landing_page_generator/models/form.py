from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"

TONE_PROFESSIONAL = "professional"
TONE_FRIENDLY = "friendly"

DEFAULT_PRODUCT_NAME = "Product"
DEFAULT_INDUSTRY = "Technology"
DEFAULT_TONE = TONE_PROFESSIONAL
DEFAULT_TARGET_AUDIENCE = "businesses"
DEFAULT_UNIQUE_VALUE = "innovative solution"
DEFAULT_BRAND_COLOR = "#3B82F6"


@dataclass(frozen=True)
class ResolvedAttributes:
    product_name: str
    industry: str
    tone: str
    key_features: tuple[str, ...]
    target_audience: str
    unique_value: str
    brand_color: str


class FormAttributes(BaseModel):
    """Product attributes collected by the multi-step form.

    Every field is optional; blank strings count as absent. Consumers read
    through :meth:`resolve` so that each absent field gets its named default.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "productName": "Acme",
                "industry": "Retail",
                "tone": "friendly",
                "keyFeatures": ["Smart carts", "One-tap checkout", "Loyalty", "Analytics"],
                "targetAudience": "shoppers",
                "uniqueValue": "checkout in seconds",
                "brandColor": "#FF6600",
            }
        },
    )

    product_name: str | None = Field(default=None, alias="productName")
    industry: str | None = None
    tone: str | None = Field(default=None, description="professional, friendly or free text")
    key_features: Sequence[str] = Field(default_factory=list, alias="keyFeatures")
    target_audience: str | None = Field(default=None, alias="targetAudience")
    unique_value: str | None = Field(default=None, alias="uniqueValue")
    brand_color: str | None = Field(default=None, alias="brandColor", pattern=HEX_COLOR_PATTERN)

    @field_validator(
        "product_name",
        "industry",
        "tone",
        "target_audience",
        "unique_value",
        "brand_color",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("key_features", mode="before")
    @classmethod
    def _features_list(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    def merge(self, update: "FormAttributes") -> "FormAttributes":
        """Overlay the fields explicitly set on ``update``."""
        merged = self.model_dump()
        merged.update(update.model_dump(exclude_unset=True))
        return FormAttributes.model_validate(merged)

    def resolve(self) -> ResolvedAttributes:
        return ResolvedAttributes(
            product_name=self.product_name or DEFAULT_PRODUCT_NAME,
            industry=self.industry or DEFAULT_INDUSTRY,
            tone=self.tone or DEFAULT_TONE,
            key_features=tuple(
                feature.strip() for feature in self.key_features if feature and feature.strip()
            ),
            target_audience=self.target_audience or DEFAULT_TARGET_AUDIENCE,
            unique_value=self.unique_value or DEFAULT_UNIQUE_VALUE,
            brand_color=self.brand_color or DEFAULT_BRAND_COLOR,
        )


__all__ = [
    "FormAttributes",
    "ResolvedAttributes",
    "HEX_COLOR_PATTERN",
    "TONE_PROFESSIONAL",
    "TONE_FRIENDLY",
    "DEFAULT_BRAND_COLOR",
]
