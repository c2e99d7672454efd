"""Tests for the typography extractor."""

from __future__ import annotations

from tokencss.errors import WarningKind
from tokencss.extract import extract_typography
from tokencss.extract.typography import (
    font_size_name,
    line_height_name,
    promote_device_fallback,
)
from tokencss.models import Mode


class TestNaming:
    def test_font_size_names(self):
        assert font_size_name("16") == "text-16"
        assert font_size_name("text-Body") == "text-body"

    def test_line_height_names(self):
        assert line_height_name("24") == "line-height-24"
        assert line_height_name("lineHeight-body") == "line-height-body"
        assert line_height_name("line-height-tight") == "line-height-tight"


class TestPromotion:
    def test_modeless_value_fills_missing_device_mode(self):
        promoted = promote_device_fallback({None: 12, Mode.MOBILE: 11}, has_device_modes=True)
        assert promoted == {Mode.MOBILE: 11, Mode.DESKTOP: 12}

    def test_plain_modeless_value_untouched(self):
        assert promote_device_fallback({None: 12}, has_device_modes=True) == {None: 12}

    def test_no_device_documents(self):
        contributions = {None: 12, Mode.MOBILE: 11}
        assert promote_device_fallback(contributions, has_device_modes=False) is contributions


class TestExtraction:
    def test_device_pair_becomes_token(self, make_entry):
        entries = [
            make_entry("mobile.json", {"mode": "mobile", "fontSize": {"body": 16}}),
            make_entry("desktop.json", {"mode": "desktop", "fontSize": {"body": 18}}),
        ]
        result = extract_typography(entries)

        assert result.font_size == {"text-body": {Mode.MOBILE: 16, Mode.DESKTOP: 18}}
        assert result.primitives == {}
        assert result.warnings == []
        assert result.has_section

    def test_modeless_values_are_primitives(self, make_entry):
        document = {"fontSize": {"16": 16}, "lineHeight": {"24": "24px"}}
        result = extract_typography([make_entry("base.json", document)])

        assert result.primitives == {"text-16": 16, "line-height-24": "24px"}
        assert result.font_size == {}
        assert result.line_height == {}
        assert result.warnings == []

    def test_single_mode_demoted_with_warning(self, make_entry):
        entries = [
            make_entry("mobile.json", {"mode": "mobile", "lineHeight": {"caption": 16}}),
            make_entry("desktop.json", {"mode": "desktop", "lineHeight": {}}),
        ]
        result = extract_typography(entries)

        assert result.primitives == {"line-height-caption": 16}
        [warning] = result.warnings
        assert warning.kind == WarningKind.MISSING_MODE_VARIANT
        assert warning.source == "typography"
        assert "'mobile'" in warning.message

    def test_modeless_fallback_promoted(self, make_entry):
        entries = [
            make_entry("base.json", {"fontSize": {"caption": 12}}),
            make_entry("mobile.json", {"mode": "mobile", "fontSize": {"caption": 11}}),
        ]
        result = extract_typography(entries)
        assert result.font_size == {"text-caption": {Mode.MOBILE: 11, Mode.DESKTOP: 12}}

    def test_nested_groups_skipped(self, make_entry):
        document = {"fontSize": {"heading": {"h1": 32}, "body": {"$value": 16}}}
        result = extract_typography([make_entry("base.json", document)])
        assert result.primitives == {"text-body": 16}

    def test_no_sections(self, make_entry):
        result = extract_typography([make_entry("colors.json", {"color": {}})])
        assert not result.has_section
