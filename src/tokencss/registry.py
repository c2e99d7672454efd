"""
Primitive registry.

Merges the extractors' flat primitive maps into the namespaced primitive
tree, injects baseline defaults for an empty input set, and synthesizes new
primitives on demand during token normalization.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from .defaults import DEFAULT_THEME, ThemeDefaults
from .models import Namespace, Primitive, PrimitiveType
from .units import (
    ROOT_FONT_SIZE_PX,
    css_var,
    format_number,
    is_hex_color,
    numeric_sorted,
    px_to_rem,
    to_px,
    var_name,
)

logger = logging.getLogger(__name__)

# Namespaces whose keys carry a fixed prefix, checked in order.
_PREFIXES: tuple[tuple[str, Namespace], ...] = (
    ("color-", Namespace.COLOR),
    ("spacing-", Namespace.SPACING),
    ("text-", Namespace.FONT_SIZE),
    ("line-height-", Namespace.LINE_HEIGHT),
    ("radius-", Namespace.ROUNDED),
    ("rounded-", Namespace.ROUNDED),
)

# Order in which value lookups scan namespaces.
LOOKUP_ORDER: tuple[Namespace, ...] = tuple(Namespace)


def raw_text(raw: Any) -> str:
    """Source text of a raw value (numbers without trailing zeros)."""
    if isinstance(raw, bool):
        return str(raw).lower()
    if isinstance(raw, int | float) and math.isfinite(raw):
        return format_number(float(raw), 4)
    return str(raw).strip()


class PrimitiveRegistry:
    """Namespaced primitive tree of one pipeline run.

    Primitives are unique by ``(namespace, name)``; a later write to the same
    name replaces the earlier one. Nothing is ever removed.
    """

    def __init__(
        self,
        defaults: ThemeDefaults = DEFAULT_THEME,
        root_px: float = ROOT_FONT_SIZE_PX,
    ):
        self.defaults = defaults
        self.root_px = root_px
        self._tree: dict[Namespace, dict[str, Primitive]] = {ns: {} for ns in Namespace}
        self._by_var: dict[str, Primitive] = {}
        self._synthesized: dict[tuple[Namespace, str], Primitive] = {}
        self._created: list[Primitive] = []

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def build(self, namespace: Namespace, name: str, raw: Any) -> Primitive:
        """Create (without registering) a primitive from a raw declared value."""
        text = raw_text(raw)
        if namespace == Namespace.COLOR:
            return Primitive(
                namespace=namespace, name=name, type=PrimitiveType.COLOR, value=text, raw=text
            )
        px = to_px(raw, self.root_px)
        if px is None:
            return Primitive(
                namespace=namespace, name=name, type=PrimitiveType.STRING, value=text, raw=text
            )
        return Primitive(
            namespace=namespace,
            name=name,
            type=PrimitiveType.NUMBER,
            value=px_to_rem(px, self.root_px),
            px=px,
            raw=text,
        )

    def classify(self, key: str, raw: Any) -> Primitive:
        """Place a flat ``key -> raw`` pair into its namespace.

        Key prefixes decide first; unprefixed keys are classified by the shape
        of their value (hex color, number, anything else).
        """
        key = key.removeprefix("--").lower()
        for prefix, namespace in _PREFIXES:
            if not key.startswith(prefix):
                continue
            if namespace == Namespace.COLOR:
                return self.build(namespace, key[len(prefix) :], raw)
            if namespace == Namespace.ROUNDED:
                return self.build(namespace, f"radius-{key[len(prefix):]}", raw)
            return self.build(namespace, key, raw)
        if is_hex_color(raw):
            return self.build(Namespace.COLOR, key, raw)
        return self.build(Namespace.OTHER, key, raw)

    def add(self, primitive: Primitive) -> Primitive:
        bucket = self._tree[primitive.namespace]
        previous = bucket.get(primitive.name)
        if previous is not None and self._by_var.get(previous.css_var) is previous:
            del self._by_var[previous.css_var]
        bucket[primitive.name] = primitive
        self._by_var.setdefault(primitive.css_var, primitive)
        return primitive

    def merge(self, *flat_maps: Mapping[str, Any]) -> None:
        """Merge flat primitive maps; later maps win on ``(namespace, name)`` collisions."""
        for flat in flat_maps:
            for key, raw in flat.items():
                if raw is None:
                    logger.debug("Skipping primitive %s without a value", key)
                    continue
                self.add(self.classify(key, raw))

    def add_baseline_defaults(self) -> None:
        """Inject the canonical ramp and scales so an empty run stays usable."""
        groups: tuple[tuple[Namespace, Iterable[tuple[str, str]]], ...] = (
            (Namespace.COLOR, self.defaults.color_ramp),
            (Namespace.SPACING, self.defaults.spacing_scale),
            (Namespace.FONT_SIZE, self.defaults.font_size_scale),
            (Namespace.ROUNDED, self.defaults.radius_defaults),
        )
        for namespace, pairs in groups:
            for name, value in pairs:
                if name in self._tree[namespace]:
                    continue
                is_color = namespace == Namespace.COLOR
                self.add(
                    Primitive(
                        namespace=namespace,
                        name=name,
                        type=PrimitiveType.COLOR if is_color else PrimitiveType.NUMBER,
                        value=value,
                        px=None if is_color else to_px(value, self.root_px),
                        raw=value,
                    )
                )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, namespace: Namespace, name: str) -> Primitive | None:
        return self._tree[namespace].get(name)

    def names(self, namespace: Namespace) -> list[str]:
        if namespace == Namespace.COLOR:
            return sorted(self._tree[namespace])
        return numeric_sorted(self._tree[namespace])

    def primitives(self, namespace: Namespace) -> list[Primitive]:
        bucket = self._tree[namespace]
        return [bucket[name] for name in self.names(namespace)]

    def count(self, namespace: Namespace) -> int:
        return len(self._tree[namespace])

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._tree.values())

    def __contains__(self, var: object) -> bool:
        return isinstance(var, str) and self.find_by_var(var) is not None

    def find_by_var(self, var: str) -> Primitive | None:
        """Primitive declared as custom property ``var`` (``--x`` or ``var(--x)``)."""
        name = var_name(var) or css_var(var.strip().lower())
        found = self._by_var.get(name)
        if found is not None:
            return found
        for bucket in self._tree.values():
            for primitive in bucket.values():
                if primitive.css_var == name:
                    return primitive
        return None

    def px_of(self, expression: Any) -> float | None:
        """Pixel value of a reference or literal, when known."""
        name = var_name(expression)
        if name is not None:
            primitive = self.find_by_var(name)
            return primitive.px if primitive is not None else None
        return to_px(expression, self.root_px)

    def matches(self, primitive: Primitive, raw: Any) -> bool:
        px = to_px(raw, self.root_px)
        if px is not None and primitive.px is not None:
            return math.isclose(px, primitive.px, abs_tol=1e-9)
        text = raw_text(raw).lower()
        return text in (primitive.value.lower(), (primitive.raw or "").lower())

    def find_by_value(
        self, raw: Any, namespaces: Iterable[Namespace] = LOOKUP_ORDER
    ) -> Primitive | None:
        """First primitive whose value equals ``raw``, scanning namespaces then sorted names."""
        for namespace in namespaces:
            bucket = self._tree[namespace]
            for name in sorted(bucket):
                if self.matches(bucket[name], raw):
                    return bucket[name]
        return None

    # -------------------------------------------------------------------------
    # Synthesis
    # -------------------------------------------------------------------------

    def _value_key(self, raw: Any) -> str:
        px = to_px(raw, self.root_px)
        if px is not None:
            return format_number(px, 4)
        return raw_text(raw).lower()

    def synthesize(self, namespace: Namespace, name: str, raw: Any) -> tuple[Primitive, bool]:
        """Register a primitive for ``(namespace, raw)`` unless one was already synthesized.

        Returns:
            ``(primitive, created)``. Repeating a request for the same
            namespace and value returns the first primitive with
            ``created=False``.
        """
        key = (namespace, self._value_key(raw))
        existing = self._synthesized.get(key)
        if existing is not None:
            return existing, False

        current = self.get(namespace, name)
        if current is not None and self.matches(current, raw):
            self._synthesized[key] = current
            return current, False

        candidate, suffix = name, 2
        while self.get(namespace, candidate) is not None:
            candidate = f"{name}-{suffix}"
            suffix += 1
        primitive = self.add(self.build(namespace, candidate, raw))
        self._synthesized[key] = primitive
        self._created.append(primitive)
        return primitive, True

    @property
    def synthesized(self) -> list[Primitive]:
        """Primitives created by ``synthesize``, in creation order."""
        return list(self._created)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """The ``primitives.json`` tree; ungrouped primitives sit at the top level."""
        out: dict[str, Any] = {}
        for namespace in Namespace:
            if namespace == Namespace.OTHER:
                continue
            out[namespace.value] = {p.name: p.to_json() for p in self.primitives(namespace)}
        for primitive in self.primitives(Namespace.OTHER):
            out.setdefault(primitive.name, primitive.to_json())
        return out
