"""
Spacing extractor.

Spacing and border-radius sections are flat and mode-less: each key becomes
one primitive, and the token map is a 1:1 alias of those primitives.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..ingest import find_section
from ..models import Entry, PrimitiveType, Token, TokenGroup
from ..units import slugify, to_px
from .common import leaf_value, ordered_entries

logger = logging.getLogger(__name__)

_RADIUS_PREFIX_RE = re.compile(r"^(?:radius|rounded)-", re.IGNORECASE)


@dataclass
class SpacingExtraction:
    primitives: dict[str, Any] = field(default_factory=dict)
    tokens: dict[str, Token] = field(default_factory=dict)
    has_spacing_section: bool = False
    has_rounded_section: bool = False


def spacing_name(key: Any) -> str:
    name = slugify([key])
    return name if name.startswith("spacing-") else f"spacing-{name}"


def radius_name(key: Any) -> str:
    return f"radius-{_RADIUS_PREFIX_RE.sub('', slugify([key]))}"


def _flat_values(section: Mapping[str, Any] | None) -> list[tuple[Any, Any]]:
    """Scalar ``(key, value)`` pairs of a flat section, without nested groups or empty values."""
    if section is None:
        return []
    pairs: list[tuple[Any, Any]] = []
    for key in sorted(section, key=str):
        raw = leaf_value(section[key])
        if raw is None or isinstance(raw, Mapping | list):
            logger.debug("Skipping non-scalar spacing entry %s", key)
            continue
        pairs.append((key, raw))
    return pairs


def extract_spacing(entries: Iterable[Entry]) -> SpacingExtraction:
    result = SpacingExtraction()

    for entry in ordered_entries(entries):
        section = find_section(entry.document, "spacing")
        if section is not None:
            result.has_spacing_section = True
            for key, raw in _flat_values(section):
                result.primitives[spacing_name(key)] = raw

        rounded = find_section(entry.document, "rounded")
        if rounded is not None:
            result.has_rounded_section = True
            for key, raw in _flat_values(rounded):
                result.primitives[radius_name(key)] = raw

    for name, raw in result.primitives.items():
        result.tokens[name] = Token(
            name=name,
            group=TokenGroup.SPACING,
            type=PrimitiveType.NUMBER,
            px=to_px(raw),
        )
    return result
