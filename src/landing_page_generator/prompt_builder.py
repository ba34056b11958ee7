from __future__ import annotations

import json
from typing import Any

from .dictionaries import (
    HERO_IMAGE_URL,
    feature_icon,
    feature_id,
    testimonial_avatar,
    testimonial_id,
)
from .models.content import FEATURE_COUNT, TESTIMONIAL_COUNT
from .models.form import FormAttributes


def build_prompt(attrs: FormAttributes) -> str:
    """Render the copywriting instruction for the given form attributes."""
    resolved = attrs.resolve()
    key_features = ", ".join(resolved.key_features) or "Not specified"
    schema = json.dumps(_schema_skeleton(), indent=2, ensure_ascii=False)

    return f"""You are an expert landing page copywriter and marketing specialist. Generate compelling, conversion-optimized content for a landing page.

**Product Information:**
- Product Name: {resolved.product_name}
- Industry: {resolved.industry}
- Target Audience: {resolved.target_audience}
- Tone: {resolved.tone}
- Unique Value Proposition: {resolved.unique_value}
- Key Features: {key_features}
- Brand Color: {resolved.brand_color}

**Requirements:**
1. Write a hero section with an attention-grabbing headline and a compelling subheadline
2. Write an engaging "About" section that explains the product's value
3. Generate exactly {FEATURE_COUNT} unique features with creative titles
4. Create exactly {TESTIMONIAL_COUNT} authentic-sounding customer testimonials with realistic names, roles and companies
5. Use persuasive, benefit-focused language
6. Match the {resolved.tone} tone throughout
7. Tailor the content for {resolved.target_audience}
8. Emphasize the unique value: {resolved.unique_value}

**Field Constraints:**
- hero.headline: max 12 words, benefit-driven
- hero.subhead: max 25 words, what the product does and why it matters
- about.title: max 8 words
- about.content: 2-3 sentences about the product story, mission or approach
- features[].title: max 4 words
- features[].description: max 20 words, benefit-focused
- testimonials[].quote: max 30 words, mention specific benefits
- Keep the ids, icons and image URLs shown below unless you have better ones

**Output Format (JSON only, no markdown):**
{schema}

Generate ONLY the JSON object. Do not include any markdown formatting, code blocks, or explanatory text."""


def _schema_skeleton() -> dict[str, Any]:
    return {
        "hero": {
            "headline": "Main headline",
            "subhead": "Supporting text",
            "imageUrl": HERO_IMAGE_URL,
        },
        "about": {
            "title": "About section title",
            "content": "Product story, mission or approach",
        },
        "features": [
            {
                "id": feature_id(position),
                "title": "Feature name",
                "description": "Benefit-focused description",
                "icon": feature_icon(position),
            }
            for position in range(1, FEATURE_COUNT + 1)
        ],
        "testimonials": [
            {
                "id": testimonial_id(position),
                "name": "Realistic full name",
                "role": "Job title",
                "company": "Company name",
                "quote": "Authentic testimonial",
                "avatar": testimonial_avatar(position),
            }
            for position in range(1, TESTIMONIAL_COUNT + 1)
        ],
    }


__all__ = ["build_prompt"]
