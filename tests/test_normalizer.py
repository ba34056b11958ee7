import json

import pytest

from landing_page_generator.dictionaries import HERO_IMAGE_URL, TESTIMONIAL_AVATARS
from landing_page_generator.errors import MalformedResponse
from landing_page_generator.fallback import (
    default_testimonials,
    synthesize_content,
    synthesize_features,
)
from landing_page_generator.models.form import FormAttributes
from landing_page_generator.normalizer import (
    normalize_or_fallback,
    normalize_response,
    parse_response,
    unwrap_fenced,
)

ATTRS = FormAttributes(product_name="Acme", industry="Retail", tone="friendly")


def model_payload() -> dict:
    return {
        "hero": {
            "headline": "Shop Smarter Today",
            "subhead": "Acme makes retail checkout effortless.",
            "imageUrl": "https://example.com/hero.png",
        },
        "about": {"title": "Why Acme", "content": "We build tools for modern stores."},
        "features": [
            {"id": f"f{n}", "title": f"Title {n}", "description": f"Desc {n}", "icon": "Star"}
            for n in range(1, 5)
        ],
        "testimonials": [
            {
                "id": f"t{n}",
                "name": f"Person {n}",
                "role": "Owner",
                "company": "Shop",
                "quote": "Love it.",
                "avatar": f"https://example.com/{n}.png",
            }
            for n in range(1, 4)
        ],
    }


@pytest.mark.parametrize(
    "text, expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('  ```JSON\n{"a": 1}```  ', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('{"a": 1}', '{"a": 1}'),
        ('\n\n{"a": 1}\n', '{"a": 1}'),
    ],
)
def test_unwrap_fenced(text, expected):
    assert unwrap_fenced(text) == expected


def test_fenced_response_parses_like_unfenced():
    raw = json.dumps(model_payload())
    fenced = f"```json\n{raw}\n```"
    assert normalize_response(fenced, ATTRS) == normalize_response(raw, ATTRS)


def test_complete_response_is_kept_verbatim():
    content = normalize_response(json.dumps(model_payload()), ATTRS)

    assert content.hero.headline == "Shop Smarter Today"
    assert content.hero.image_url == "https://example.com/hero.png"
    assert [feature.id for feature in content.features] == ["f1", "f2", "f3", "f4"]
    assert content.testimonials[2].avatar == "https://example.com/3.png"


def test_partial_hero_uses_defaults_and_fallback_lists():
    raw = '```json\n{"hero":{"headline":"Go Faster"}}\n```'

    content = normalize_response(raw, ATTRS)

    assert content.hero.headline == "Go Faster"
    assert content.hero.subhead == "Innovative solutions for modern challenges"
    assert content.hero.image_url == HERO_IMAGE_URL
    assert content.about.title == "About Acme"
    assert content.about.content == "We provide cutting-edge solutions tailored to your needs."
    assert content.features == synthesize_features(ATTRS)
    assert content.testimonials == default_testimonials()


def test_short_feature_list_is_replaced_but_hero_and_about_survive():
    payload = model_payload()
    payload["features"] = payload["features"][:2]

    content = normalize_response(json.dumps(payload), ATTRS)

    assert content.hero.headline == payload["hero"]["headline"]
    assert content.hero.subhead == payload["hero"]["subhead"]
    assert content.about.title == payload["about"]["title"]
    assert content.about.content == payload["about"]["content"]
    assert content.features == synthesize_features(ATTRS)
    assert len(content.features) == 4
    assert [item.id for item in content.testimonials] == ["t1", "t2", "t3"]


def test_short_testimonial_list_is_replaced():
    payload = model_payload()
    payload["testimonials"] = payload["testimonials"][:2]
    content = normalize_response(json.dumps(payload), ATTRS)
    assert content.testimonials == default_testimonials()


def test_extra_entries_are_truncated():
    payload = model_payload()
    payload["features"].append({"id": "f5", "title": "Five", "description": "x", "icon": "Zap"})
    payload["testimonials"].append(dict(payload["testimonials"][0], id="t4"))

    content = normalize_response(json.dumps(payload), ATTRS)

    assert [feature.id for feature in content.features] == ["f1", "f2", "f3", "f4"]
    assert [item.id for item in content.testimonials] == ["t1", "t2", "t3"]


def test_missing_entry_fields_get_positional_defaults():
    payload = model_payload()
    payload["features"][1] = {"title": "Only a title"}
    payload["features"][3] = "not an object"
    payload["testimonials"][2] = {"name": "Dana", "quote": ""}

    content = normalize_response(json.dumps(payload), ATTRS)

    second = content.features[1]
    assert (second.id, second.title, second.icon) == ("feature-2", "Only a title", "Shield")
    assert second.description == "Amazing feature description"
    fourth = content.features[3]
    assert (fourth.id, fourth.title, fourth.icon) == ("feature-4", "Feature 4", "Star")
    third = content.testimonials[2]
    assert third.id == "testimonial-3"
    assert third.name == "Dana"
    assert (third.role, third.company, third.quote) == ("User", "Company", "Great product!")
    assert third.avatar == TESTIMONIAL_AVATARS[2]


def test_duplicate_ids_are_made_unique():
    payload = model_payload()
    for feature in payload["features"]:
        feature["id"] = "same"

    content = normalize_response(json.dumps(payload), ATTRS)

    assert [feature.id for feature in content.features] == ["same", "feature-2", "feature-3", "feature-4"]


def test_non_string_and_blank_fields_are_defaulted():
    payload = model_payload()
    payload["hero"]["headline"] = 42
    payload["hero"]["subhead"] = "   "
    payload["about"] = ["not", "an", "object"]
    payload["features"] = {"not": "a list"}

    content = normalize_response(json.dumps(payload), FormAttributes())

    assert content.hero.headline == "Transform Your Technology Business"
    assert content.hero.subhead == "Innovative solutions for modern challenges"
    assert content.about.title == "About Product"
    assert content.features == synthesize_features(FormAttributes())


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Sorry, I cannot help with that.",
        "```json\n{\"hero\": \n```",
        "[1, 2]",
        '"text"',
        '{"hero": {"headline": ' + "1" * 5000 + "}}",
        "[" * 200000 + "]" * 200000,
    ],
    ids=["empty", "prose", "truncated", "array", "string", "huge-integer", "deep-nesting"],
)
def test_unusable_text_raises_malformed(raw):
    with pytest.raises(MalformedResponse):
        normalize_response(raw, ATTRS)


def test_unparsable_text_yields_fallback_content():
    assert normalize_or_fallback("not json at all", ATTRS) == synthesize_content(ATTRS)


def test_parse_error_keeps_raw_text():
    with pytest.raises(MalformedResponse) as excinfo:
        parse_response("{broken")
    assert excinfo.value.raw_text == "{broken"


def test_oversized_integer_yields_fallback_content():
    raw = '{"hero": {"headline": ' + "1" * 5000 + "}}"
    assert normalize_or_fallback(raw, ATTRS) == synthesize_content(ATTRS)


def test_surrounding_whitespace_in_model_text_is_kept():
    payload = model_payload()
    payload["hero"]["headline"] = "  Shop Smarter Today  "
    payload["about"]["content"] = "We build tools for modern stores.\n"

    content = normalize_response(json.dumps(payload), ATTRS)

    assert content.hero.headline == "  Shop Smarter Today  "
    assert content.about.content == "We build tools for modern stores.\n"
