"""
Unit conversion and naming helpers shared by every pipeline stage.

Pixel quantities are the common currency: extractors read raw pixel numbers,
the registry stores root-relative ``rem`` strings alongside the pixel value,
and the clamp calculator works on pixels again.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

ROOT_FONT_SIZE_PX = 16.0
REM_PLACES = 4

_HEX_RE = re.compile(r"^#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_VAR_RE = re.compile(r"var\(\s*(--[a-z0-9_-]+)\s*\)", re.IGNORECASE)
_BARE_VAR_RE = re.compile(r"^--[a-z0-9_-]+$", re.IGNORECASE)
_FIRST_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")
_WHITESPACE_RE = re.compile(r"\s+")


def format_number(value: float, places: int) -> str:
    """Round to ``places`` decimals and trim trailing zeros (``1.500`` -> ``1.5``)."""
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def px_to_rem(px: float, root_px: float = ROOT_FONT_SIZE_PX) -> str:
    """Convert a pixel quantity to a trimmed ``rem`` string."""
    return f"{format_number(px / root_px, REM_PLACES)}rem"


def to_px(value: Any, root_px: float = ROOT_FONT_SIZE_PX) -> float | None:
    """Interpret a raw value as a pixel quantity.

    Accepts numbers, numeric strings and strings ending in ``px`` or ``rem``.
    Returns None for anything else (colors, keywords, var() references).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        scale = 1.0
        if text.endswith("px"):
            text = text[:-2]
        elif text.endswith("rem"):
            text = text[:-3]
            scale = root_px
        try:
            number = float(text) * scale
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def format_px(px: float) -> str:
    """Render a pixel value for use inside a variable name (``14.5`` -> ``14_5``)."""
    return format_number(px, 2).replace(".", "_")


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(_HEX_RE.match(value.strip()))


def css_var(name: str) -> str:
    """``spacing-4`` -> ``--spacing-4`` (idempotent)."""
    return name if name.startswith("--") else f"--{name}"


def var_ref(name: str) -> str:
    """``spacing-4`` -> ``var(--spacing-4)``."""
    return f"var({css_var(name)})"


def var_name(expression: Any) -> str | None:
    """Extract the custom property name from ``var(--x)`` or a bare ``--x``."""
    if not isinstance(expression, str):
        return None
    text = expression.strip()
    if _BARE_VAR_RE.match(text):
        return text.lower()
    match = _VAR_RE.search(text)
    return match.group(1).lower() if match else None


def slugify(parts: Iterable[Any]) -> str:
    """Join path parts into a lowercased, dash-separated name."""
    joined = "-".join(str(p).strip() for p in parts if str(p).strip())
    return _WHITESPACE_RE.sub("-", joined).lower()


def alias_to_name(alias: str) -> str:
    """Convert an alias pointer such as ``color/gray/100`` to ``color-gray-100``."""
    return slugify(alias.replace("/", "-").split("-"))


# =============================================================================
# Numeric key ordering
# =============================================================================


def numeric_key(key: str) -> tuple[int, float, str]:
    """Sort key for scale names.

    ``none`` sorts as zero, ``full`` after every finite number, otherwise the
    first number embedded in the key is used. Keys without a number sort after
    all numeric ones. Ties break lexicographically on the original key.
    """
    lowered = key.lower()
    if "none" in lowered:
        return (0, 0.0, key)
    if "full" in lowered:
        return (0, math.inf, key)
    match = _FIRST_NUMBER_RE.search(lowered)
    if match:
        return (0, float(match.group(1)), key)
    return (1, 0.0, key)


def numeric_sorted(keys: Iterable[str]) -> list[str]:
    return sorted(keys, key=numeric_key)
