"""
Token normalization and primitive synthesis.

Converts the extractors' token candidates into canonical per-mode references,
synthesizing typography primitives where no existing primitive carries the
requested value, and validates that every reference lands on a primitive.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import WarningKind
from .extract import ColorExtraction, SpacingExtraction, TypographyExtraction
from .models import BuildWarning, Mode, Namespace, PrimitiveType, Token, TokenGroup, TokenSet
from .registry import LOOKUP_ORDER, PrimitiveRegistry
from .reporting import PipelineLog
from .units import format_px, to_px, var_name

logger = logging.getLogger(__name__)

# (token group, primitive namespace, value-named prefix, label used in messages)
_TYPOGRAPHY_GROUPS: tuple[tuple[TokenGroup, Namespace, str, str], ...] = (
    (TokenGroup.FONT_SIZE, Namespace.FONT_SIZE, "text", "Font-size"),
    (TokenGroup.LINE_HEIGHT, Namespace.LINE_HEIGHT, "line-height", "Line-height"),
)


class TokenNormalizer:
    """Resolves token candidates against a registry, growing it as needed."""

    def __init__(self, registry: PrimitiveRegistry, log: PipelineLog | None = None):
        self.registry = registry
        self.log = log if log is not None else PipelineLog()

    def _synthesize(self, namespace: Namespace, name: str, raw: Any, token: str, mode: Mode) -> str:
        primitive, created = self.registry.synthesize(namespace, name, raw)
        if created:
            self.log.emit(f"Synthesized primitive {primitive.css_var} for {token} ({mode.value})")
        return primitive.reference

    def resolve_typography(
        self, namespace: Namespace, prefix: str, token: str, mode: Mode, raw: Any
    ) -> str:
        """Reference for one typography value.

        1. reuse a primitive of the expected namespace with the same value;
        2. when only a primitive of another namespace matches, synthesize a
           value-named primitive (``text-18``) in the expected namespace;
        3. otherwise synthesize ``<token>-<mode>``.
        """
        same = self.registry.find_by_value(raw, (namespace,))
        if same is not None:
            return same.reference

        px = to_px(raw, self.registry.root_px)
        foreign = self.registry.find_by_value(raw, (ns for ns in LOOKUP_ORDER if ns != namespace))
        if foreign is not None and px is not None:
            value_name = f"{prefix}-{format_px(px)}"
            if self.registry.get(namespace, value_name) is None:
                return self._synthesize(namespace, value_name, raw, token, mode)

        return self._synthesize(namespace, f"{token}-{mode.value}", raw, token, mode)

    def normalize(
        self,
        colors: ColorExtraction,
        spacing: SpacingExtraction,
        typography: TypographyExtraction,
    ) -> TokenSet:
        tokens = TokenSet()

        for name in sorted(colors.tokens):
            per_mode = colors.tokens[name]
            tokens.colors[name] = Token(
                name=name,
                group=TokenGroup.COLORS,
                type=PrimitiveType.COLOR,
                modes={mode: per_mode[mode].css for mode in Mode if mode in per_mode},
            )

        for name in sorted(spacing.tokens):
            if any(self.registry.get(ns, name) for ns in (Namespace.SPACING, Namespace.ROUNDED)):
                continue
            tokens.spacing[name] = spacing.tokens[name]

        candidates: Mapping[TokenGroup, Mapping[str, Mapping[Mode, Any]]] = {
            TokenGroup.FONT_SIZE: typography.font_size,
            TokenGroup.LINE_HEIGHT: typography.line_height,
        }
        for group, namespace, prefix, _ in _TYPOGRAPHY_GROUPS:
            target = tokens.group(group)
            for name in sorted(candidates[group]):
                per_mode = candidates[group][name]
                target[name] = Token(
                    name=name,
                    group=group,
                    type=PrimitiveType.NUMBER,
                    modes={
                        mode: self.resolve_typography(namespace, prefix, name, mode, per_mode[mode])
                        for mode in Mode
                        if mode in per_mode
                    },
                )

        logger.debug("Normalized %d tokens", len(tokens))
        return tokens


def normalize_tokens(
    colors: ColorExtraction,
    spacing: SpacingExtraction,
    typography: TypographyExtraction,
    registry: PrimitiveRegistry,
    log: PipelineLog | None = None,
) -> TokenSet:
    return TokenNormalizer(registry, log).normalize(colors, spacing, typography)


# =============================================================================
# Validation
# =============================================================================


def validate_references(tokens: TokenSet, registry: PrimitiveRegistry) -> list[BuildWarning]:
    """Warn about token references that land on no primitive.

    A color token's own name is also an acceptable target. Mode-less tokens
    (spacing aliases) are checked through the primitive they alias.
    """

    def exists(var: str) -> bool:
        if registry.find_by_var(var) is not None:
            return True
        name = var.removeprefix("--")
        return name in tokens.colors or name.removeprefix("color-") in tokens.colors

    def references(token: Token) -> list[tuple[str, str]]:
        if not token.modes:
            return [("", token.value)]
        return [(f" {mode.value}", token.modes[mode]) for mode in token.ordered_modes()]

    groups: tuple[tuple[str, dict[str, Token]], ...] = (
        ("Color", tokens.colors),
        ("Spacing", tokens.spacing),
        *((label, tokens.group(group)) for group, _, _, label in _TYPOGRAPHY_GROUPS),
    )
    warnings: list[BuildWarning] = []
    for label, group_tokens in groups:
        for name in sorted(group_tokens):
            for where, reference in references(group_tokens[name]):
                var = var_name(reference)
                if var is None or exists(var):
                    continue
                warnings.append(
                    BuildWarning(
                        kind=WarningKind.MISSING_PRIMITIVE,
                        token=name,
                        source="validate",
                        message=(
                            f"{label} token '{name}'{where} references missing primitive '{var}'"
                        ),
                    )
                )
    return warnings

