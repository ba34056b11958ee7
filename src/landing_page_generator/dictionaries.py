from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .models.section import SectionType

HERO_IMAGE_URL = "https://images.unsplash.com/photo-1551434678-e076c223a692?w=800&h=600&fit=crop"

# Positional defaults: the icon of feature n and the avatar of testimonial n
# are FEATURE_ICONS[n - 1] and TESTIMONIAL_AVATARS[n - 1].
FEATURE_ICONS: Sequence[str] = ("Zap", "Shield", "Rocket", "Star")

TESTIMONIAL_AVATARS: Sequence[str] = (
    "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=100&h=100&fit=crop",
    "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=100&h=100&fit=crop",
    "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=100&h=100&fit=crop",
)

SUBHEAD_PHRASES: Mapping[str, str] = {
    "professional": "Professional-grade",
    "friendly": "User-friendly",
}
DEFAULT_SUBHEAD_PHRASE = "Cutting-edge"

# Defaults used when repairing a model response field by field.
REPAIR_DEFAULTS: Mapping[str, str] = {
    "hero.headline": "Transform Your {industry} Business",
    "hero.subhead": "Innovative solutions for modern challenges",
    "about.title": "About {product_name}",
    "about.content": "We provide cutting-edge solutions tailored to your needs.",
    "feature.title": "Feature {position}",
    "feature.description": "Amazing feature description",
    "testimonial.name": "Customer Name",
    "testimonial.role": "User",
    "testimonial.company": "Company",
    "testimonial.quote": "Great product!",
}


@dataclass(frozen=True)
class CannedFeature:
    title: str
    description: str


@dataclass(frozen=True)
class CannedTestimonial:
    name: str
    role: str
    company: str
    quote: str


DEFAULT_FEATURES: Sequence[CannedFeature] = (
    CannedFeature(
        title="Lightning Fast",
        description="Built for speed and performance that scales with your business.",
    ),
    CannedFeature(
        title="Secure & Reliable",
        description="Enterprise-grade security to keep your data safe.",
    ),
    CannedFeature(
        title="Rapid Growth",
        description="Tools designed to accelerate your business growth.",
    ),
    CannedFeature(
        title="Premium Quality",
        description="Top-tier solutions that exceed expectations.",
    ),
)

DEFAULT_TESTIMONIALS: Sequence[CannedTestimonial] = (
    CannedTestimonial(
        name="Sarah Johnson",
        role="CEO",
        company="TechCorp Inc",
        quote="This solution transformed our business operations and boosted productivity by 200%.",
    ),
    CannedTestimonial(
        name="Michael Chen",
        role="Product Manager",
        company="InnovateNow",
        quote="The best investment we made this year. Our team loves using it every day.",
    ),
    CannedTestimonial(
        name="Emily Rodriguez",
        role="Founder",
        company="StartupHub",
        quote="Incredibly intuitive and powerful. Exactly what we needed to scale our business.",
    ),
)


@dataclass(frozen=True)
class StandardSectionDefinition:
    key: str
    type: SectionType
    title: str
    order: int


STANDARD_SECTIONS: Sequence[StandardSectionDefinition] = (
    StandardSectionDefinition(key="hero", type=SectionType.hero, title="Hero Section", order=0),
    StandardSectionDefinition(key="about", type=SectionType.about, title="About Section", order=1),
    StandardSectionDefinition(
        key="features", type=SectionType.features, title="Features Section", order=2
    ),
    StandardSectionDefinition(
        key="testimonials", type=SectionType.testimonials, title="Testimonials Section", order=3
    ),
)


def feature_id(position: int) -> str:
    return f"feature-{position}"


def testimonial_id(position: int) -> str:
    return f"testimonial-{position}"


def feature_icon(position: int) -> str:
    return FEATURE_ICONS[(position - 1) % len(FEATURE_ICONS)]


def testimonial_avatar(position: int) -> str:
    return TESTIMONIAL_AVATARS[(position - 1) % len(TESTIMONIAL_AVATARS)]


def subhead_phrase(tone: str) -> str:
    return SUBHEAD_PHRASES.get(tone, DEFAULT_SUBHEAD_PHRASE)


__all__ = [
    "HERO_IMAGE_URL",
    "FEATURE_ICONS",
    "TESTIMONIAL_AVATARS",
    "REPAIR_DEFAULTS",
    "DEFAULT_FEATURES",
    "DEFAULT_TESTIMONIALS",
    "STANDARD_SECTIONS",
    "StandardSectionDefinition",
    "feature_id",
    "testimonial_id",
    "feature_icon",
    "testimonial_avatar",
    "subhead_phrase",
]
