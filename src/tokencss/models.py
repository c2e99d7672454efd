"""
Core data model for the token pipeline.

Entries are immutable snapshots of input documents. Primitives are mode-less
named values grouped by namespace. Tokens carry one resolved expression per
declared mode and always have at least two modes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import WarningKind
from .units import var_ref

# =============================================================================
# Enums
# =============================================================================


class Mode(StrEnum):
    """Axis along which a document's declared values vary."""

    LIGHT = "light"
    DARK = "dark"
    MOBILE = "mobile"
    DESKTOP = "desktop"

    @classmethod
    def parse(cls, raw: Any) -> Mode | None:
        """Return the recognized mode for a declared label, or None."""
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


COLOR_SCHEME_MODES: tuple[Mode, Mode] = (Mode.LIGHT, Mode.DARK)
DEVICE_MODES: tuple[Mode, Mode] = (Mode.MOBILE, Mode.DESKTOP)


class Namespace(StrEnum):
    """Primitive namespaces, in registry precedence order."""

    COLOR = "color"
    SPACING = "spacing"
    FONT_SIZE = "fontSize"
    LINE_HEIGHT = "lineHeight"
    ROUNDED = "rounded"
    OTHER = "other"


class PrimitiveType(StrEnum):
    COLOR = "color"
    NUMBER = "number"
    STRING = "string"


class TokenGroup(StrEnum):
    COLORS = "colors"
    SPACING = "spacing"
    FONT_SIZE = "fontSize"
    LINE_HEIGHT = "lineHeight"


# =============================================================================
# Input
# =============================================================================


class Entry(BaseModel):
    """One parsed input document and its declared mode."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    document: dict[str, Any]
    mode: Mode | None = None


# =============================================================================
# Primitives
# =============================================================================


class Primitive(BaseModel):
    """A named, mode-less design value."""

    model_config = ConfigDict(frozen=True)

    namespace: Namespace
    name: str
    type: PrimitiveType
    value: str
    px: float | None = Field(default=None, description="Pixel equivalent, when numeric")
    raw: str | None = Field(default=None, description="Value text as declared in the source")

    @property
    def css_var(self) -> str:
        if self.namespace == Namespace.COLOR:
            return f"--color-{self.name}"
        return f"--{self.name}"

    @property
    def reference(self) -> str:
        return var_ref(self.css_var)

    def to_json(self) -> dict[str, Any]:
        return {"$type": self.type.value, "value": self.value}


@dataclass(frozen=True)
class ModeValue:
    """A raw per-mode contribution collected by an extractor."""

    raw: Any = None
    alias: str | None = None
    external_id: str | None = None


@dataclass(frozen=True)
class ResolvedValue:
    """A per-mode value after resolution: a primitive reference or a literal."""

    reference: str | None = None
    literal: str | None = None
    external_id: str | None = None

    @property
    def css(self) -> str:
        if self.reference:
            return var_ref(self.reference)
        return self.literal or ""

    @property
    def identity(self) -> str:
        return (self.reference or self.literal or "").lower()


# =============================================================================
# Tokens
# =============================================================================


class Token(BaseModel):
    """A named semantic value resolved per mode."""

    model_config = ConfigDict(frozen=True)

    name: str
    group: TokenGroup
    type: PrimitiveType = PrimitiveType.NUMBER
    modes: dict[Mode, str] = Field(default_factory=dict)
    px: float | None = None

    @property
    def value(self) -> str:
        return var_ref(self.name)

    def ordered_modes(self) -> list[Mode]:
        return [mode for mode in Mode if mode in self.modes]

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "value": self.value}
        if self.modes:
            data["modes"] = {mode.value: self.modes[mode] for mode in self.ordered_modes()}
        if self.px is not None:
            data["px"] = self.px
        return data


class TokenSet(BaseModel):
    """All normalized tokens of one run, grouped for ``tokens.json``."""

    colors: dict[str, Token] = Field(default_factory=dict)
    spacing: dict[str, Token] = Field(default_factory=dict)
    font_size: dict[str, Token] = Field(default_factory=dict)
    line_height: dict[str, Token] = Field(default_factory=dict)

    def group(self, group: TokenGroup) -> dict[str, Token]:
        return {
            TokenGroup.COLORS: self.colors,
            TokenGroup.SPACING: self.spacing,
            TokenGroup.FONT_SIZE: self.font_size,
            TokenGroup.LINE_HEIGHT: self.line_height,
        }[group]

    def __len__(self) -> int:
        return len(self.colors) + len(self.spacing) + len(self.font_size) + len(self.line_height)

    def to_json(self) -> dict[str, Any]:
        def dump(tokens: dict[str, Token]) -> dict[str, Any]:
            return {name: tokens[name].to_json() for name in sorted(tokens)}

        return {
            "colors": dump(self.colors),
            "spacing": dump(self.spacing),
            "fonts": {
                "fontSize": dump(self.font_size),
                "lineHeight": dump(self.line_height),
            },
        }


# =============================================================================
# Warnings
# =============================================================================


class BuildWarning(BaseModel):
    """Advisory message; never blocks output."""

    model_config = ConfigDict(frozen=True)

    kind: WarningKind
    message: str
    token: str | None = None
    source: str = "pipeline"

    def format(self) -> str:
        return f"[{self.source}] {self.kind.value}: {self.message}"

    def to_json(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "type": self.kind.value,
            "token": self.token,
            "message": self.message,
        }
