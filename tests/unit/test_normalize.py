"""Tests for token normalization, primitive synthesis and reference validation."""

from __future__ import annotations

from tokencss.errors import WarningKind
from tokencss.extract import ColorExtraction, SpacingExtraction, TypographyExtraction
from tokencss.models import Mode, Namespace, ResolvedValue, Token, TokenGroup, TokenSet
from tokencss.normalize import TokenNormalizer, normalize_tokens, validate_references
from tokencss.registry import PrimitiveRegistry
from tokencss.reporting import PipelineLog


def typography(**font_size) -> TypographyExtraction:
    return TypographyExtraction(font_size=font_size)


def run(registry: PrimitiveRegistry, typo: TypographyExtraction, log: PipelineLog | None = None):
    return normalize_tokens(ColorExtraction(), SpacingExtraction(), typo, registry, log)


class TestTypographyResolution:
    def test_reuses_same_namespace_primitive(self):
        registry = PrimitiveRegistry()
        registry.merge({"text-16": 16, "text-18": 18})

        tokens = run(registry, typography(**{"text-body": {Mode.MOBILE: 16, Mode.DESKTOP: "18px"}}))

        assert tokens.font_size["text-body"].modes == {
            Mode.MOBILE: "var(--text-16)",
            Mode.DESKTOP: "var(--text-18)",
        }
        assert registry.synthesized == []

    def test_foreign_match_synthesizes_value_named_primitive(self):
        registry = PrimitiveRegistry()
        registry.merge({"spacing-8": 8})
        log = PipelineLog()

        tokens = run(
            registry, typography(**{"text-caption": {Mode.MOBILE: 8, Mode.DESKTOP: 13}}), log
        )

        modes = tokens.font_size["text-caption"].modes
        assert modes[Mode.MOBILE] == "var(--text-8)"
        assert modes[Mode.DESKTOP] == "var(--text-caption-desktop)"
        assert registry.get(Namespace.FONT_SIZE, "text-8").value == "0.5rem"
        assert "Synthesized primitive --text-8 for text-caption (mobile)" in log.messages
        assert "Synthesized primitive --text-caption-desktop for text-caption (desktop)" in (
            log.messages
        )

    def test_taken_value_name_falls_back_to_token_mode_name(self):
        registry = PrimitiveRegistry()
        registry.merge({"spacing-8": 8, "text-8": 9})

        tokens = run(registry, typography(**{"text-caption": {Mode.MOBILE: 8, Mode.DESKTOP: 9}}))

        modes = tokens.font_size["text-caption"].modes
        assert modes[Mode.MOBILE] == "var(--text-caption-mobile)"
        assert modes[Mode.DESKTOP] == "var(--text-8)"

    def test_equal_values_share_one_synthesized_primitive(self):
        registry = PrimitiveRegistry()
        tokens = run(
            registry,
            typography(
                **{
                    "text-a": {Mode.MOBILE: 15, Mode.DESKTOP: 20},
                    "text-b": {Mode.MOBILE: 15, Mode.DESKTOP: 21},
                }
            ),
        )
        assert tokens.font_size["text-a"].modes[Mode.MOBILE] == "var(--text-a-mobile)"
        assert tokens.font_size["text-b"].modes[Mode.MOBILE] == "var(--text-a-mobile)"
        assert len(registry.synthesized) == 3

    def test_line_heights_use_their_own_namespace(self):
        registry = PrimitiveRegistry()
        registry.merge({"text-24": 24})
        typo = TypographyExtraction(
            line_height={"line-height-body": {Mode.MOBILE: 24, Mode.DESKTOP: 28}}
        )

        tokens = run(registry, typo)

        modes = tokens.line_height["line-height-body"].modes
        assert modes[Mode.MOBILE] == "var(--line-height-24)"
        assert modes[Mode.DESKTOP] == "var(--line-height-body-desktop)"


class TestOtherGroups:
    def test_color_tokens_keep_resolved_css(self):
        colors = ColorExtraction(
            tokens={
                "surface": {
                    Mode.DARK: ResolvedValue(reference="--color-gray-900"),
                    Mode.LIGHT: ResolvedValue(literal="#FFFFFF"),
                }
            }
        )
        tokens = normalize_tokens(
            colors, SpacingExtraction(), TypographyExtraction(), PrimitiveRegistry()
        )
        surface = tokens.colors["surface"]
        assert surface.ordered_modes() == [Mode.LIGHT, Mode.DARK]
        assert surface.modes == {Mode.LIGHT: "#FFFFFF", Mode.DARK: "var(--color-gray-900)"}

    def test_spacing_aliases_of_existing_primitives_dropped(self):
        registry = PrimitiveRegistry()
        registry.merge({"spacing-4": 4})
        spacing = SpacingExtraction(
            tokens={
                "spacing-4": Token(name="spacing-4", group=TokenGroup.SPACING, px=4.0),
                "spacing-gap": Token(name="spacing-gap", group=TokenGroup.SPACING),
            }
        )
        tokens = TokenNormalizer(registry).normalize(
            ColorExtraction(), spacing, TypographyExtraction()
        )
        assert list(tokens.spacing) == ["spacing-gap"]


class TestValidateReferences:
    def test_missing_primitive_reported(self):
        registry = PrimitiveRegistry()
        registry.merge({"text-16": 16})
        tokens = TokenSet(
            font_size={
                "text-x": Token(
                    name="text-x",
                    group=TokenGroup.FONT_SIZE,
                    modes={Mode.MOBILE: "var(--text-nope)", Mode.DESKTOP: "var(--text-16)"},
                )
            }
        )
        [warning] = validate_references(tokens, registry)
        assert warning.kind == WarningKind.MISSING_PRIMITIVE
        assert warning.source == "validate"
        assert warning.message == (
            "Font-size token 'text-x' mobile references missing primitive '--text-nope'"
        )

    def test_literals_and_token_names_accepted(self):
        tokens = TokenSet(
            colors={
                "surface": Token(
                    name="surface",
                    group=TokenGroup.COLORS,
                    modes={Mode.LIGHT: "#FFFFFF", Mode.DARK: "#000000"},
                ),
                "card": Token(
                    name="card",
                    group=TokenGroup.COLORS,
                    modes={Mode.LIGHT: "var(--surface)", Mode.DARK: "var(--color-surface)"},
                ),
            }
        )
        assert validate_references(tokens, PrimitiveRegistry()) == []

    def test_dangling_spacing_alias_reported(self):
        registry = PrimitiveRegistry()
        registry.merge({"spacing-4": 4})
        tokens = TokenSet(
            spacing={
                "spacing-4": Token(name="spacing-4", group=TokenGroup.SPACING, px=4.0),
                "spacing-gap": Token(name="spacing-gap", group=TokenGroup.SPACING),
            }
        )
        [warning] = validate_references(tokens, registry)
        assert warning.token == "spacing-gap"
        assert warning.message == (
            "Spacing token 'spacing-gap' references missing primitive '--spacing-gap'"
        )
