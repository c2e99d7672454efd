"""
Theme assembler.

Renders the final stylesheet in a fixed section order inside a single
``:root`` scope, then runs the structural self-check on the result.

Section order:
    1. canonical header, custom breakpoints
    2. color-scheme metadata
    3. global color ramp, project color primitives
    4. global semantic color tokens, project color tokens
    5. other global primitives (transitions, z-index, radii, fonts)
    6. spacing primitives and tokens
    7. typography primitives and tokens
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .clamp import fluid_clamp
from .config import PipelineConfig
from .defaults import DEFAULT_THEME, DefaultGroup, ThemeDefaults
from .models import Mode, Namespace, Primitive, Token, TokenSet
from .registry import PrimitiveRegistry
from .units import format_number, to_px

logger = logging.getLogger(__name__)

INDENT = "  "
ROOT_OPEN = ":root {"
_HEADER_RULE = "----------------------------------"
_BLANK_RUN_RE = re.compile(r"(?:[ \t]*\n)*")


def render_header(title: str) -> str:
    """The canonical header comment that opens every generated stylesheet."""
    return f"/* {_HEADER_RULE}\n * {title}\n * {_HEADER_RULE} */"


def _comment(text: str) -> str:
    return f"/* {text} */"


def _px_comment(px: float | None) -> str:
    return f" /* {format_number(px, 2)}px */" if px is not None else ""


@dataclass(frozen=True)
class AssemblyContext:
    """Facts about the input set that drive section gating."""

    modes: frozenset[Mode] = frozenset()
    has_spacing_section: bool = False
    has_typography_section: bool = False
    empty_input: bool = False


@dataclass
class Assembly:
    css: str
    corrections: list[str] = field(default_factory=list)


# =============================================================================
# Structural self-check
# =============================================================================


def _single_blank_line_after(text: str, anchor_end: int) -> tuple[str, int]:
    """Force exactly one blank line after the line ending at ``anchor_end``.

    Returns the corrected text and the number of blank lines found.
    """
    tail = text[anchor_end:]
    run = _BLANK_RUN_RE.match(tail)
    run_text = run.group(0) if run else ""
    found = max(run_text.count("\n") - 1, 0)
    if run_text == "\n\n":
        return text, 1
    return f"{text[:anchor_end]}\n\n{tail[len(run_text):]}", found


def check_structure(css: str, header: str) -> tuple[str, list[str]]:
    """Verify and repair the header and blank-line layout of a stylesheet.

    The text must start with ``header``, followed by exactly one blank line,
    and the ``:root {`` line must be followed by exactly one blank line.

    Returns:
        The (possibly corrected) text and a description of every correction.
    """
    corrections: list[str] = []
    text = css

    if not text.startswith(header):
        stripped = text.lstrip()
        if stripped.startswith(header):
            corrections.append("removed leading whitespace before header")
            text = stripped
        else:
            corrections.append("inserted missing canonical header")
            text = f"{header}\n\n{stripped}"

    text, found = _single_blank_line_after(text, len(header))
    if found != 1:
        corrections.append(f"expected 1 blank line after header, found {found}")

    root_at = text.find(ROOT_OPEN)
    if root_at >= 0:
        text, found = _single_blank_line_after(text, root_at + len(ROOT_OPEN))
        if found != 1:
            corrections.append(f"expected 1 blank line after '{ROOT_OPEN}', found {found}")

    for correction in corrections:
        logger.debug("Structure corrected: %s", correction)
    return text, corrections


# =============================================================================
# Assembler
# =============================================================================


class ThemeAssembler:
    """Renders ``theme.css`` from a registry and a normalized token set."""

    def __init__(
        self,
        registry: PrimitiveRegistry,
        tokens: TokenSet,
        config: PipelineConfig | None = None,
        defaults: ThemeDefaults = DEFAULT_THEME,
    ):
        self.registry = registry
        self.tokens = tokens
        self.config = config or PipelineConfig()
        self.defaults = defaults
        self.titles = defaults.titles

    @property
    def header(self) -> str:
        return render_header(self.config.header_title)

    # -------------------------------------------------------------------------
    # Token expressions
    # -------------------------------------------------------------------------

    def token_expression(self, token: Token) -> tuple[str, str]:
        """CSS expression for a token plus an optional trailing comment."""
        modes = token.modes
        if Mode.LIGHT in modes and Mode.DARK in modes:
            return f"light-dark({modes[Mode.LIGHT]}, {modes[Mode.DARK]})", ""

        if Mode.MOBILE in modes and Mode.DESKTOP in modes:
            mobile, desktop = modes[Mode.MOBILE], modes[Mode.DESKTOP]
            mobile_px = self.registry.px_of(mobile)
            desktop_px = self.registry.px_of(desktop)
            if mobile == desktop or (mobile_px is not None and mobile_px == desktop_px):
                return mobile, ""
            expression = fluid_clamp(
                mobile,
                desktop,
                self.registry.px_of,
                viewport_min=self.config.viewport_min_px,
                viewport_max=self.config.viewport_max_px,
                root_px=self.config.root_font_size_px,
            )
            comment = ""
            if mobile_px is not None and desktop_px is not None:
                comment = (
                    f" /* {format_number(mobile_px, 2)}px / {format_number(desktop_px, 2)}px */"
                )
            return expression, comment

        ordered = token.ordered_modes()
        if ordered:
            return modes[ordered[0]], ""
        return token.value, ""

    def _token_line(self, token: Token) -> str:
        expression, comment = self.token_expression(token)
        return f"--{token.name}: {expression};{comment}"

    @staticmethod
    def _primitive_line(primitive: Primitive) -> str:
        return f"{primitive.css_var}: {primitive.value};{_px_comment(primitive.px)}"

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def breakpoints_block(self) -> list[str]:
        lines = ["/* stylelint-disable */", _comment(self.titles.breakpoints)]
        root_px = self.config.root_font_size_px
        for operator, prefix in ((">=", ""), ("<", "until-")):
            for name, width in self.defaults.breakpoints:
                lines.append(
                    f"@custom-media --{prefix}{name} (width {operator} {width});"
                    f"{_px_comment(to_px(width, root_px))}"
                )
        lines.append("/* stylelint-enable */")
        return lines

    def color_scheme_section(self, modes: frozenset[Mode]) -> list[str]:
        scheme = "light dark" if Mode.LIGHT in modes and Mode.DARK in modes else "light"
        return [
            _comment(self.titles.color_scheme),
            f"color-scheme: {scheme};",
            "",
            '&[data-theme="light"] { color-scheme: light; }',
            '&[data-theme="dark"] { color-scheme: dark; }',
        ]

    def _ramp_override(self, name: str) -> tuple[Primitive | None, str | None]:
        """Project primitive overriding a ramp entry, and the synonym used if any."""
        direct = self.registry.get(Namespace.COLOR, name)
        if direct is not None:
            return direct, None
        family, _, step = name.partition("-")
        if family == "gray" and step:
            for synonym in self.defaults.gray_synonyms:
                alt = f"{synonym}-{step}"
                found = self.registry.get(Namespace.COLOR, alt)
                if found is not None:
                    return found, alt
        return None, None

    def color_sections(self) -> list[list[str]]:
        ramp = [_comment(self.titles.global_colors)]
        used_synonyms: set[str] = set()
        for name, default in self.defaults.color_ramp:
            override, synonym = self._ramp_override(name)
            if synonym:
                used_synonyms.add(synonym)
            ramp.append(f"--color-{name}: {override.value if override else default};")

        covered = self.defaults.color_ramp_names | used_synonyms
        project = [
            self._primitive_line(p)
            for p in self.registry.primitives(Namespace.COLOR)
            if p.name not in covered
        ]
        sections = [ramp]
        if project:
            sections.append([_comment(self.titles.project_colors), *project])
        return sections

    def _semantic_line(self, name: str, default: str) -> str:
        token = self.tokens.colors.get(name)
        if token is not None:
            return self._token_line(token)
        primitive = self.registry.get(Namespace.COLOR, name)
        if primitive is not None:
            return f"--{name}: {primitive.value};"
        return f"--{name}: {default};"

    def color_token_sections(self) -> list[list[str]]:
        lines = [_comment(self.titles.global_color_tokens)]
        for index, group in enumerate(self.defaults.semantic_color_groups):
            if index:
                lines.append("")
            lines.append(_comment(group.title))
            lines.extend(self._semantic_line(name, default) for name, default in group.entries)

        semantic = self.defaults.semantic_token_names
        project = [
            self._token_line(self.tokens.colors[name])
            for name in sorted(self.tokens.colors)
            if name not in semantic
        ]
        sections = [lines]
        if project:
            sections.append([_comment(self.titles.project_color_tokens), *project])
        return sections

    def _other_value(self, name: str, default: str) -> str:
        if name.startswith("radius-"):
            rounded = self.registry.get(Namespace.ROUNDED, name)
            if rounded is not None:
                return rounded.value
        other = self.registry.get(Namespace.OTHER, name)
        if other is not None:
            return other.raw or other.value
        return default

    def _group_lines(self, group: DefaultGroup) -> list[str]:
        lines = [_comment(group.title)]
        lines.extend(
            f"--{name}: {self._other_value(name, default)};" for name, default in group.entries
        )
        if group.title == self.defaults.radius_group_title:
            known = set(group.names)
            lines.extend(
                f"--{p.name}: {p.value};"
                for p in self.registry.primitives(Namespace.ROUNDED)
                if p.name not in known
            )
        return lines

    def other_globals_section(self) -> list[str]:
        lines = [_comment(self.titles.other_globals)]
        for index, group in enumerate(self.defaults.other_global_groups):
            if index:
                lines.append("")
            lines.extend(self._group_lines(group))
        return lines

    def spacing_sections(self, context: AssemblyContext) -> list[list[str]]:
        if not (context.has_spacing_section or context.empty_input):
            return []
        sections = []
        primitives = [self._primitive_line(p) for p in self.registry.primitives(Namespace.SPACING)]
        if primitives:
            title = (
                self.titles.spacing_fallback
                if context.empty_input
                else self.titles.spacing_primitives
            )
            sections.append([_comment(title), *primitives])
        tokens = [
            self._token_line(self.tokens.spacing[name]) for name in sorted(self.tokens.spacing)
        ]
        if tokens:
            sections.append([_comment(self.titles.spacing_tokens), *tokens])
        return sections

    def _typography_token_order(self, token: Token) -> tuple[float, str]:
        anchor = token.modes.get(Mode.MOBILE)
        if anchor is None:
            ordered = token.ordered_modes()
            anchor = token.modes[ordered[0]] if ordered else None
        px = self.registry.px_of(anchor) if anchor is not None else None
        return (px if px is not None else float("inf"), token.name)

    def typography_sections(self, context: AssemblyContext) -> list[list[str]]:
        if not (context.has_typography_section or context.empty_input):
            return []
        sections = []
        primitives = [
            self._primitive_line(p)
            for namespace in (Namespace.FONT_SIZE, Namespace.LINE_HEIGHT)
            for p in self.registry.primitives(namespace)
        ]
        if primitives:
            title = (
                self.titles.typography_fallback
                if context.empty_input
                else self.titles.typography_primitives
            )
            sections.append([_comment(title), *primitives])

        tokens = [
            self._token_line(token)
            for group in (self.tokens.font_size, self.tokens.line_height)
            for token in sorted(group.values(), key=self._typography_token_order)
        ]
        if tokens:
            sections.append([_comment(self.titles.typography_tokens), *tokens])
        return sections

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def root_sections(self, context: AssemblyContext) -> list[list[str]]:
        return [
            self.color_scheme_section(context.modes),
            *self.color_sections(),
            *self.color_token_sections(),
            self.other_globals_section(),
            *self.spacing_sections(context),
            *self.typography_sections(context),
        ]

    def render(self, context: AssemblyContext) -> Assembly:
        parts = [self.header, ""]
        if self.config.emit_breakpoints:
            parts.extend([*self.breakpoints_block(), ""])
        parts.extend([ROOT_OPEN, ""])

        for index, section in enumerate(self.root_sections(context)):
            if index:
                parts.append("")
            parts.extend(f"{INDENT}{line}" if line else "" for line in section)
        parts.append("}")

        css = "\n".join(parts) + "\n"
        css, corrections = check_structure(css, self.header)
        return Assembly(css=css, corrections=corrections)