"""Tests for the spacing and border-radius extractor."""

from __future__ import annotations

from tokencss.extract import extract_spacing
from tokencss.extract.spacing import radius_name, spacing_name
from tokencss.models import TokenGroup


def test_names():
    assert spacing_name("4") == "spacing-4"
    assert spacing_name("spacing-4") == "spacing-4"
    assert spacing_name("Large Gap") == "spacing-large-gap"
    assert radius_name("sm") == "radius-sm"
    assert radius_name("rounded-lg") == "radius-lg"
    assert radius_name("Radius-md") == "radius-md"


def test_flat_sections(make_entry):
    document = {
        "Spacing": {"4": 4, "8": {"$type": "number", "$value": 8}},
        "rounded": {"sm": 4, "full": "9999px"},
    }
    result = extract_spacing([make_entry("base.json", document)])

    assert result.primitives == {
        "spacing-4": 4,
        "spacing-8": 8,
        "radius-full": "9999px",
        "radius-sm": 4,
    }
    assert result.has_spacing_section
    assert result.has_rounded_section


def test_tokens_alias_primitives(make_entry):
    result = extract_spacing([make_entry("base.json", {"spacing": {"12": "12px"}})])

    token = result.tokens["spacing-12"]
    assert token.group == TokenGroup.SPACING
    assert token.px == 12.0
    assert token.value == "var(--spacing-12)"
    assert token.modes == {}


def test_later_file_wins(make_entry):
    result = extract_spacing(
        [
            make_entry("b.json", {"spacing": {"4": 5}}),
            make_entry("a.json", {"spacing": {"4": 4}}),
        ]
    )
    assert result.primitives["spacing-4"] == 5


def test_no_sections(make_entry):
    result = extract_spacing([make_entry("colors.json", {"color": {}})])
    assert result.primitives == {}
    assert not result.has_spacing_section
    assert not result.has_rounded_section


def test_nested_groups_and_empty_values_skipped(make_entry):
    document = {
        "spacing": {"4": 4, "gap": None, "group": {"sm": {"$type": "number", "$value": 2}}},
        "rounded": {"sm": 4, "set": {"lg": 8}},
    }
    result = extract_spacing([make_entry("base.json", document)])

    assert result.primitives == {"spacing-4": 4, "radius-sm": 4}
    assert sorted(result.tokens) == ["radius-sm", "spacing-4"]
