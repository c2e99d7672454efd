"""Tests for the primitive registry."""

from __future__ import annotations

import pytest

from tokencss.models import Namespace, PrimitiveType
from tokencss.registry import PrimitiveRegistry, raw_text


@pytest.fixture
def registry() -> PrimitiveRegistry:
    return PrimitiveRegistry()


class TestClassify:
    def test_prefixed_keys(self, registry):
        color = registry.classify("color-brand-500", "#3366FF")
        assert (color.namespace, color.name, color.css_var) == (
            Namespace.COLOR,
            "brand-500",
            "--color-brand-500",
        )

        spacing = registry.classify("spacing-4", 4)
        assert spacing.namespace == Namespace.SPACING
        assert spacing.type == PrimitiveType.NUMBER
        assert spacing.value == "0.25rem"
        assert spacing.px == 4.0
        assert spacing.raw == "4"

        assert registry.classify("text-16", "16px").namespace == Namespace.FONT_SIZE
        assert registry.classify("line-height-24", 24).namespace == Namespace.LINE_HEIGHT

    def test_rounded_keys_become_radius(self, registry):
        primitive = registry.classify("rounded-lg", 8)
        assert primitive.namespace == Namespace.ROUNDED
        assert primitive.name == "radius-lg"
        assert primitive.css_var == "--radius-lg"

    def test_unprefixed_keys_classified_by_value(self, registry):
        assert registry.classify("brand-bg", "#3366FF").namespace == Namespace.COLOR
        other = registry.classify("font-base", "Inter, sans-serif")
        assert other.namespace == Namespace.OTHER
        assert other.type == PrimitiveType.STRING
        assert other.value == "Inter, sans-serif"

    def test_raw_text(self):
        assert raw_text(16.0) == "16"
        assert raw_text(1.25) == "1.25"
        assert raw_text(" 12px ") == "12px"
        assert raw_text(True) == "true"


class TestMerge:
    def test_later_maps_win(self, registry):
        registry.merge({"spacing-4": 4}, {"spacing-4": 5})
        assert registry.get(Namespace.SPACING, "spacing-4").px == 5.0
        assert registry.count(Namespace.SPACING) == 1

    def test_values_without_content_skipped(self, registry):
        registry.merge({"spacing-4": None})
        assert len(registry) == 0

    def test_names_are_numerically_sorted(self, registry):
        registry.merge({"spacing-16": 16, "spacing-4": 4, "spacing-8": 8})
        assert registry.names(Namespace.SPACING) == ["spacing-4", "spacing-8", "spacing-16"]

    def test_baseline_defaults(self, registry):
        registry.add_baseline_defaults()
        assert registry.count(Namespace.COLOR) == 32
        assert registry.count(Namespace.SPACING) == 9
        assert registry.count(Namespace.FONT_SIZE) == 3
        assert registry.count(Namespace.ROUNDED) == 7
        assert registry.count(Namespace.LINE_HEIGHT) == 0
        assert registry.get(Namespace.SPACING, "spacing-0").value == "0"
        assert registry.get(Namespace.FONT_SIZE, "text-30").px == 30.0

    def test_baseline_defaults_keep_project_values(self, registry):
        registry.merge({"spacing-4": 5})
        registry.add_baseline_defaults()
        assert registry.get(Namespace.SPACING, "spacing-4").px == 5.0


class TestLookup:
    def test_find_by_var(self, registry):
        registry.merge({"text-16": 16, "color-gray-100": "#F5F5F5"})
        assert registry.find_by_var("var(--text-16)").name == "text-16"
        assert registry.find_by_var("--color-gray-100").name == "gray-100"
        assert registry.find_by_var("--missing") is None
        assert "var(--text-16)" in registry

    def test_px_of(self, registry):
        registry.merge({"text-16": 16})
        assert registry.px_of("var(--text-16)") == 16.0
        assert registry.px_of("1.5rem") == 24.0
        assert registry.px_of("var(--unknown)") is None

    def test_find_by_value_follows_namespace_order(self, registry):
        registry.merge({"text-16": 16, "spacing-16": "1rem"})
        assert registry.find_by_value(16).name == "spacing-16"
        assert registry.find_by_value("16px", (Namespace.FONT_SIZE,)).name == "text-16"
        assert registry.find_by_value(17) is None

    def test_find_by_value_text(self, registry):
        registry.merge({"font-base": "Inter"})
        assert registry.find_by_value("inter").name == "font-base"


class TestSynthesize:
    def test_creates_once_per_value(self, registry):
        first, created = registry.synthesize(Namespace.FONT_SIZE, "text-body-mobile", 15)
        assert created
        assert first.value == "0.9375rem"

        again, created = registry.synthesize(Namespace.FONT_SIZE, "text-other-mobile", "15px")
        assert not created
        assert again is first
        assert registry.synthesized == [first]

    def test_name_collision_gets_suffix(self, registry):
        registry.merge({"text-body-mobile": 14})
        primitive, created = registry.synthesize(Namespace.FONT_SIZE, "text-body-mobile", 15)
        assert created
        assert primitive.name == "text-body-mobile-2"

    def test_existing_primitive_with_same_value_reused(self, registry):
        registry.merge({"text-15": 15})
        primitive, created = registry.synthesize(Namespace.FONT_SIZE, "text-15", 15)
        assert not created
        assert primitive.name == "text-15"
        assert registry.synthesized == []


class TestToJson:
    def test_tree_shape(self, registry):
        registry.merge(
            {
                "color-brand": "#3366FF",
                "spacing-4": 4,
                "radius-sm": 4,
                "text-16": 16,
                "font-base": "Inter",
            }
        )
        data = registry.to_json()
        assert list(data) == [
            "color",
            "spacing",
            "fontSize",
            "lineHeight",
            "rounded",
            "font-base",
        ]
        assert data["color"] == {"brand": {"$type": "color", "value": "#3366FF"}}
        assert data["spacing"] == {"spacing-4": {"$type": "number", "value": "0.25rem"}}
        assert data["rounded"] == {"radius-sm": {"$type": "number", "value": "0.25rem"}}
        assert data["lineHeight"] == {}
        assert data["font-base"] == {"$type": "string", "value": "Inter"}
