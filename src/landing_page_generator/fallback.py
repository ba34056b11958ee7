from __future__ import annotations

from .dictionaries import (
    DEFAULT_FEATURES,
    DEFAULT_TESTIMONIALS,
    HERO_IMAGE_URL,
    feature_icon,
    feature_id,
    subhead_phrase,
    testimonial_avatar,
    testimonial_id,
)
from .models.content import (
    FEATURE_COUNT,
    AboutContent,
    Feature,
    GeneratedContent,
    HeroContent,
    Testimonial,
)
from .models.form import FormAttributes


def synthesize_content(attrs: FormAttributes) -> GeneratedContent:
    """Build complete landing-page content from the form alone.

    Template interpolation only: the same attributes always give the same
    content, and nothing here talks to the model.
    """
    resolved = attrs.resolve()
    return GeneratedContent(
        hero=HeroContent(
            headline=f"Transform Your {resolved.industry} with {resolved.product_name}",
            subhead=(
                f"{subhead_phrase(resolved.tone)} tools designed for {resolved.target_audience}."
            ),
            image_url=HERO_IMAGE_URL,
        ),
        about=AboutContent(
            title=f"About {resolved.product_name}",
            content=(
                f"We're revolutionizing the {resolved.industry} industry with "
                f"{resolved.unique_value}. Our mission is to empower "
                f"{resolved.target_audience} with the tools they need to succeed."
            ),
        ),
        features=synthesize_features(attrs),
        testimonials=default_testimonials(),
    )


def synthesize_features(attrs: FormAttributes) -> list[Feature]:
    key_features = attrs.resolve().key_features
    if len(key_features) >= FEATURE_COUNT:
        return [
            Feature(
                id=feature_id(position),
                title=name,
                description=f"Experience the power of {name.lower()} with our advanced platform.",
                icon=feature_icon(position),
            )
            for position, name in enumerate(key_features[:FEATURE_COUNT], start=1)
        ]
    return [
        Feature(
            id=feature_id(position),
            title=canned.title,
            description=canned.description,
            icon=feature_icon(position),
        )
        for position, canned in enumerate(DEFAULT_FEATURES, start=1)
    ]


def default_testimonials() -> list[Testimonial]:
    # Testimonials are not personalised without the model.
    return [
        Testimonial(
            id=testimonial_id(position),
            name=canned.name,
            role=canned.role,
            company=canned.company,
            quote=canned.quote,
            avatar=testimonial_avatar(position),
        )
        for position, canned in enumerate(DEFAULT_TESTIMONIALS, start=1)
    ]


__all__ = ["synthesize_content", "synthesize_features", "default_testimonials"]
