"""
Color extractor.

Captures color primitives from every color tree, then collects per-mode token
contributions from override-flagged leaves and top-level color leaves of
mode-declaring documents.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import WarningKind
from ..ingest import find_section, is_section_key
from ..models import BuildWarning, Entry, Mode, ModeValue, ResolvedValue
from ..units import alias_to_name, css_var, slugify
from ..walker import is_token_leaf, walk
from .common import missing_mode_warning, ordered_entries, single_mode

logger = logging.getLogger(__name__)

SOURCE = "colors"
COLOR_TYPE = "color"
OVERRIDE_KEY = "com.figma.isOverride"
ALIAS_KEY = "com.figma.aliasData"
VARIABLE_ID_KEY = "com.figma.variableId"


@dataclass
class ColorExtraction:
    """Flat color primitives (``color-<path>`` keys) and resolved mode tokens."""

    primitives: dict[str, str] = field(default_factory=dict)
    tokens: dict[str, dict[Mode, ResolvedValue]] = field(default_factory=dict)
    warnings: list[BuildWarning] = field(default_factory=list)
    modes: set[Mode] = field(default_factory=set)


# =============================================================================
# Leaf inspection
# =============================================================================


def _extensions(leaf: Mapping[str, Any]) -> Mapping[str, Any]:
    extensions = leaf.get("$extensions")
    return extensions if isinstance(extensions, Mapping) else {}


def color_value(leaf: Mapping[str, Any]) -> str | None:
    """Concrete color of a leaf: ``$value.hex`` or a plain string ``$value``."""
    value = leaf.get("$value")
    if isinstance(value, Mapping):
        value = value.get("hex")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def is_color_leaf(leaf: Mapping[str, Any]) -> bool:
    return leaf.get("$type") == COLOR_TYPE


def is_override(leaf: Mapping[str, Any]) -> bool:
    return bool(_extensions(leaf).get(OVERRIDE_KEY))


def mode_value(leaf: Mapping[str, Any]) -> ModeValue:
    extensions = _extensions(leaf)
    alias = None
    alias_data = extensions.get(ALIAS_KEY)
    if isinstance(alias_data, Mapping) and alias_data.get("targetVariableName"):
        alias = alias_to_name(str(alias_data["targetVariableName"]))
    external_id = extensions.get(VARIABLE_ID_KEY)
    return ModeValue(
        raw=color_value(leaf),
        alias=alias,
        external_id=str(external_id) if external_id else None,
    )


# =============================================================================
# Resolution
# =============================================================================


def resolve(value: ModeValue, primitives: Mapping[str, str]) -> ResolvedValue:
    """Resolve one contribution: alias, then case-insensitive value match, then literal."""
    if value.alias:
        return ResolvedValue(reference=css_var(value.alias), external_id=value.external_id)
    if value.raw:
        wanted = value.raw.lower()
        for name in sorted(primitives):
            if primitives[name].lower() == wanted:
                return ResolvedValue(reference=css_var(name), external_id=value.external_id)
        return ResolvedValue(literal=value.raw, external_id=value.external_id)
    return ResolvedValue(external_id=value.external_id)


def primitive_key(name: str) -> str:
    """Flat registry key of a demoted token, always inside the color namespace."""
    return name if name.startswith("color-") else f"color-{name}"


def _demoted_value(resolved: ResolvedValue, primitives: Mapping[str, str]) -> str | None:
    if resolved.reference:
        return primitives.get(resolved.reference.removeprefix("--"))
    return resolved.literal


# =============================================================================
# Extraction
# =============================================================================


def _scan_entry(
    entry: Entry,
    primitives: dict[str, str],
    contributions: dict[str, dict[Mode, ModeValue]],
) -> None:
    mode = entry.mode

    def capture(path: tuple[str, ...], leaf: Mapping[str, Any]) -> None:
        if not is_color_leaf(leaf):
            return
        if is_override(leaf):
            # Overrides are token contributions only, and only in mode documents.
            if mode is not None:
                contributions.setdefault(slugify(path), {})[mode] = mode_value(leaf)
            return
        value = color_value(leaf)
        if value:
            primitives[slugify(("color", *path))] = value

    walk(find_section(entry.document, "color"), capture)

    if mode is None:
        return
    for key in sorted(entry.document, key=str):
        node = entry.document[key]
        if str(key).startswith("$") or is_section_key(key):
            continue
        if is_token_leaf(node) and is_color_leaf(node):
            contributions.setdefault(slugify([key]), {})[mode] = mode_value(node)


def extract_colors(entries: Iterable[Entry]) -> ColorExtraction:
    result = ColorExtraction()
    contributions: dict[str, dict[Mode, ModeValue]] = {}

    for entry in ordered_entries(entries):
        _scan_entry(entry, result.primitives, contributions)
        if entry.mode is not None:
            result.modes.add(entry.mode)

    demoted: dict[str, str] = {}
    for name in sorted(contributions):
        per_mode: dict[Mode, ResolvedValue] = {}
        for mode, value in contributions[name].items():
            resolved = resolve(value, result.primitives)
            if resolved.identity:
                per_mode[mode] = resolved
        if not per_mode:
            continue

        degenerate = single_mode(per_mode)
        if degenerate is None:
            result.tokens[name] = per_mode
            _check_identical(name, per_mode, result.warnings)
            continue

        only_mode, resolved = degenerate
        value = _demoted_value(resolved, result.primitives)
        if value is None:
            result.warnings.append(
                BuildWarning(
                    kind=WarningKind.MISSING_PRIMITIVE,
                    token=name,
                    source=SOURCE,
                    message=(
                        f"Token '{name}' references missing primitive '{resolved.reference}'"
                    ),
                )
            )
            continue
        demoted[primitive_key(name)] = value
        if only_mode is not None:
            result.warnings.append(missing_mode_warning(name, only_mode, SOURCE))

    result.primitives.update(demoted)
    logger.debug(
        "Extracted %d color primitives and %d color tokens",
        len(result.primitives),
        len(result.tokens),
    )
    return result


def _check_identical(
    name: str, per_mode: Mapping[Mode, ResolvedValue], warnings: list[BuildWarning]
) -> None:
    light = per_mode.get(Mode.LIGHT)
    dark = per_mode.get(Mode.DARK)
    if light is None or dark is None or light.identity != dark.identity:
        return
    warnings.append(
        BuildWarning(
            kind=WarningKind.IDENTICAL_VARIANTS,
            token=name,
            source=SOURCE,
            message=(
                f"Token '{name}' has identical light/dark variants referencing "
                f"'{light.reference or light.literal}'; kept as a token."
            ),
        )
    )
