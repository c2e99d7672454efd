"""
Immutable default tables for the generated stylesheet.

The assembler and the registry receive a ``ThemeDefaults`` instance instead of
re-declaring these values. ``DEFAULT_THEME`` is the canonical table set; the
exact text of every value below is part of the stylesheet output.
"""

from __future__ import annotations

from dataclasses import dataclass, field

Pairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class DefaultGroup:
    """A commented group of ``--name: value;`` lines with builtin defaults."""

    title: str
    entries: Pairs

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)


@dataclass(frozen=True)
class SectionTitles:
    """Comment titles of the top-level stylesheet sections."""

    color_scheme: str = "Theme (color-scheme)"
    global_colors: str = "Global colors"
    project_colors: str = "Project color primitives"
    global_color_tokens: str = "Global color tokens"
    project_color_tokens: str = "Project color tokens"
    other_globals: str = "Other global primitives"
    spacing_primitives: str = "Spacing primitives"
    spacing_fallback: str = "Spacing (fallback defaults)"
    spacing_tokens: str = "Spacing tokens"
    typography_primitives: str = "Typography primitives"
    typography_fallback: str = "Typography (fallback defaults)"
    typography_tokens: str = "Typography tokens"
    breakpoints: str = "Custom Breakpoints"


# =============================================================================
# Colors
# =============================================================================

COLOR_RAMP: Pairs = (
    ("white", "oklch(1 0 0)"),
    ("black", "oklch(0 0 0)"),
    ("gray-50", "oklch(0.97 0 0)"),
    ("gray-100", "oklch(0.922 0 0)"),
    ("gray-200", "oklch(0.87 0 0)"),
    ("gray-300", "oklch(0.708 0 0)"),
    ("gray-400", "oklch(0.556 0 0)"),
    ("gray-500", "oklch(0.439 0 0)"),
    ("gray-600", "oklch(0.371 0 0)"),
    ("gray-700", "oklch(0.269 0 0)"),
    ("gray-800", "oklch(0.205 0 0)"),
    ("gray-900", "oklch(0.145 0 0)"),
    ("error-100", "oklch(0.97 0.1 27.52)"),
    ("error-300", "oklch(0.7054 0.19 27.52)"),
    ("error-500", "oklch(0.5054 0.19 27.52)"),
    ("error-700", "oklch(0.3554 0.19 27.52)"),
    ("error-900", "oklch(0.2054 0.11 27.52)"),
    ("success-100", "oklch(0.9446 0.13 150.685)"),
    ("success-300", "oklch(0.7166 0.13 150.73)"),
    ("success-500", "oklch(0.5166 0.13 150.73)"),
    ("success-700", "oklch(0.3666 0.13 150.73)"),
    ("success-900", "oklch(0.2166 0.13 150.73)"),
    ("warning-100", "oklch(0.97 0.08 49.95)"),
    ("warning-300", "oklch(0.8315 0.17 49.95)"),
    ("warning-500", "oklch(0.6315 0.17 49.95)"),
    ("warning-700", "oklch(0.4815 0.17 49.95)"),
    ("warning-900", "oklch(0.3315 0.11 49.95)"),
    ("info-100", "oklch(0.97 0.09 256.37)"),
    ("info-300", "oklch(0.7133 0.18 256.37)"),
    ("info-500", "oklch(0.5133 0.18 256.37)"),
    ("info-700", "oklch(0.3633 0.18 256.37)"),
    ("info-900", "oklch(0.2133 0.11 256.37)"),
)

GRAY_SYNONYMS: tuple[str, ...] = ("neutral", "slate")

SEMANTIC_COLOR_GROUPS: tuple[DefaultGroup, ...] = (
    DefaultGroup(
        "Primary color",
        (
            ("primary", "var(--color-gray-500)"),
            ("on-primary", "var(--color-white)"),
            ("primary-lighten", "oklch(from var(--primary) calc(l * 1.2) c h)"),
            ("primary-darken", "oklch(from var(--primary) calc(l * 0.8) c h)"),
        ),
    ),
    DefaultGroup(
        "Accent color",
        (
            ("accent", "light-dark(var(--primary), var(--primary-lighten))"),
            ("accent-invert", "light-dark(var(--primary-lighten), var(--primary))"),
        ),
    ),
    DefaultGroup(
        "Document surface",
        (
            ("surface", "light-dark(var(--color-white), var(--color-gray-900))"),
            ("on-surface", "light-dark(var(--color-gray-900), var(--color-gray-100))"),
        ),
    ),
    DefaultGroup(
        "Depth layers",
        (
            ("layer-1", "light-dark(var(--color-gray-50), var(--color-gray-800))"),
            ("layer-2", "light-dark(var(--color-gray-100), var(--color-gray-700))"),
            ("layer-3", "light-dark(var(--color-gray-200), var(--color-gray-600))"),
        ),
    ),
    DefaultGroup(
        "Interactions",
        (
            ("link", "light-dark(var(--primary), var(--primary-lighten))"),
            ("link-hover", "light-dark(var(--primary-darken), var(--primary))"),
            ("link-active", "light-dark(var(--primary-darken), var(--primary))"),
        ),
    ),
    DefaultGroup(
        "Selection color",
        (("selection", "light-dark(var(--primary-lighten), var(--primary-darken))"),),
    ),
    DefaultGroup(
        "Alert states",
        (
            ("warning", "light-dark(var(--color-warning-500), var(--color-warning-300))"),
            ("error", "light-dark(var(--color-error-500), var(--color-error-300))"),
            ("success", "light-dark(var(--color-success-500), var(--color-success-300))"),
            ("info", "light-dark(var(--color-info-500), var(--color-info-300))"),
        ),
    ),
    DefaultGroup(
        "Borders",
        (
            ("border-light", "var(--color-gray-400)"),
            ("border-medium", "var(--color-gray-600)"),
        ),
    ),
)


# =============================================================================
# Other globals
# =============================================================================

RADIUS_GROUP = DefaultGroup(
    "Border radius",
    (
        ("radius-none", "0"),
        ("radius-4", "0.25rem"),
        ("radius-8", "0.5rem"),
        ("radius-12", "0.75rem"),
        ("radius-16", "1rem"),
        ("radius-24", "1.5rem"),
        ("radius-full", "9999px"),
    ),
)

OTHER_GLOBAL_GROUPS: tuple[DefaultGroup, ...] = (
    DefaultGroup("Transitions and animations", (("transition-duration", "250ms"),)),
    DefaultGroup(
        "Z-index levels",
        (
            ("z-under-page-level", "-1"),
            ("z-above-page-level", "1"),
            ("z-header-level", "1000"),
            ("z-above-header-level", "2000"),
            ("z-above-all-level", "3000"),
        ),
    ),
    RADIUS_GROUP,
    DefaultGroup(
        "Font families",
        (
            ("font-base", "system-ui, sans-serif"),
            ("font-mono", "ui-monospace, monospace"),
        ),
    ),
    DefaultGroup(
        "Font weights",
        (
            ("font-weight-light", "300"),
            ("font-weight-regular", "400"),
            ("font-weight-semibold", "600"),
            ("font-weight-bold", "700"),
            ("font-weight-extrabold", "800"),
            ("font-weight-black", "900"),
        ),
    ),
)


# =============================================================================
# Baseline scales (empty input)
# =============================================================================

SPACING_SCALE: Pairs = (
    ("spacing-0", "0"),
    ("spacing-2", "0.125rem"),
    ("spacing-4", "0.25rem"),
    ("spacing-8", "0.5rem"),
    ("spacing-12", "0.75rem"),
    ("spacing-16", "1rem"),
    ("spacing-24", "1.5rem"),
    ("spacing-32", "2rem"),
    ("spacing-48", "3rem"),
)

FONT_SIZE_SCALE: Pairs = (
    ("text-16", "1rem"),
    ("text-24", "1.5rem"),
    ("text-30", "1.875rem"),
)

BREAKPOINTS: Pairs = (
    ("md", "48rem"),
    ("lg", "64rem"),
    ("xl", "80rem"),
    ("xxl", "96rem"),
)


@dataclass(frozen=True)
class ThemeDefaults:
    """Every builtin value the registry and assembler may fall back to."""

    color_ramp: Pairs = COLOR_RAMP
    gray_synonyms: tuple[str, ...] = GRAY_SYNONYMS
    semantic_color_groups: tuple[DefaultGroup, ...] = SEMANTIC_COLOR_GROUPS
    other_global_groups: tuple[DefaultGroup, ...] = OTHER_GLOBAL_GROUPS
    radius_group_title: str = RADIUS_GROUP.title
    spacing_scale: Pairs = SPACING_SCALE
    font_size_scale: Pairs = FONT_SIZE_SCALE
    breakpoints: Pairs = BREAKPOINTS
    titles: SectionTitles = field(default_factory=SectionTitles)

    @property
    def color_ramp_names(self) -> frozenset[str]:
        return frozenset(name for name, _ in self.color_ramp)

    @property
    def semantic_token_names(self) -> frozenset[str]:
        return frozenset(name for group in self.semantic_color_groups for name in group.names)

    @property
    def radius_defaults(self) -> Pairs:
        for group in self.other_global_groups:
            if group.title == self.radius_group_title:
                return group.entries
        return ()


DEFAULT_THEME = ThemeDefaults()
