"""
Fluid clamp calculator.

Collapses a mobile and a desktop endpoint into one responsive CSS expression
that interpolates linearly across the configured viewport range.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .units import ROOT_FONT_SIZE_PX, format_number, px_to_rem, to_px, var_name, var_ref

VIEWPORT_MIN_PX = 360.0
VIEWPORT_MAX_PX = 1280.0
INTERCEPT_PLACES = 3
SLOPE_PLACES = 4

PxLookup = Callable[[str], float | None]


def resolve_px(
    ref: Any, lookup: PxLookup | None = None, root_px: float = ROOT_FONT_SIZE_PX
) -> float | None:
    """Pixel quantity of an endpoint: a number, a ``px``/``rem`` string or a variable reference."""
    name = var_name(ref)
    if name is not None:
        return lookup(name) if lookup is not None else None
    return to_px(ref, root_px)


def endpoint_expression(ref: Any, root_px: float = ROOT_FONT_SIZE_PX) -> str:
    """Render an endpoint as its variable reference, a rem literal, or the raw text."""
    name = var_name(ref)
    if name is not None:
        return var_ref(name)
    px = to_px(ref, root_px)
    if px is not None:
        return px_to_rem(px, root_px)
    return str(ref).strip()


def interpolation(
    mobile_px: float,
    desktop_px: float,
    *,
    viewport_min: float = VIEWPORT_MIN_PX,
    viewport_max: float = VIEWPORT_MAX_PX,
    root_px: float = ROOT_FONT_SIZE_PX,
) -> str:
    """The ``<intercept>rem + <slope>vw`` middle term of the clamp.

    ``slope`` is pixels per viewport-width percent across the range and
    ``intercept`` is chosen so the expression equals ``mobile_px`` at
    ``viewport_min``.
    """
    slope = (desktop_px - mobile_px) * 100 / (viewport_max - viewport_min)
    intercept = mobile_px - slope * (viewport_min / 100)
    return (
        f"{format_number(intercept / root_px, INTERCEPT_PLACES)}rem + "
        f"{format_number(slope, SLOPE_PLACES)}vw"
    )


def calc_fallback(
    mobile: str,
    desktop: str,
    *,
    viewport_min: float = VIEWPORT_MIN_PX,
    viewport_max: float = VIEWPORT_MAX_PX,
) -> str:
    """Generic linear interpolation for endpoints that do not resolve to pixels."""
    span = format_number(viewport_max - viewport_min, 4)
    start = format_number(viewport_min, 4)
    return (
        f"clamp({mobile}, calc({mobile} + ((100vw - {start}px) / {span}) * "
        f"(calc({desktop} - {mobile}))), {desktop})"
    )


def fluid_clamp(
    mobile: Any,
    desktop: Any,
    lookup: PxLookup | None = None,
    *,
    viewport_min: float = VIEWPORT_MIN_PX,
    viewport_max: float = VIEWPORT_MAX_PX,
    root_px: float = ROOT_FONT_SIZE_PX,
) -> str:
    """Build ``clamp(<mobile>, <intercept>rem + <slope>vw, <desktop>)``.

    Args:
        mobile: Mobile endpoint (pixel number, ``px``/``rem`` string or variable reference).
        desktop: Desktop endpoint, same forms as ``mobile``.
        lookup: Resolves a ``--name`` custom property to its pixel value.
        viewport_min: Viewport width at which the mobile value applies.
        viewport_max: Viewport width at which the desktop value applies.
        root_px: Pixels per rem.

    Returns:
        The clamp expression. Equal endpoints are not special-cased; callers
        emit the flat value themselves.
    """
    left = endpoint_expression(mobile, root_px)
    right = endpoint_expression(desktop, root_px)
    mobile_px = resolve_px(mobile, lookup, root_px)
    desktop_px = resolve_px(desktop, lookup, root_px)

    if mobile_px is None or desktop_px is None:
        return calc_fallback(left, right, viewport_min=viewport_min, viewport_max=viewport_max)

    middle = interpolation(
        mobile_px,
        desktop_px,
        viewport_min=viewport_min,
        viewport_max=viewport_max,
        root_px=root_px,
    )
    return f"clamp({left}, {middle}, {right})"
