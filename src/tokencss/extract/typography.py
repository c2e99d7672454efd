"""
Typography extractor (font sizes and line heights).

Collects ``{token -> {mode -> raw value}}`` maps from the two sections,
promotes mode-less values into missing device modes where the token already
has a device contribution, then splits candidates into primitives and tokens.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..ingest import find_section
from ..models import DEVICE_MODES, BuildWarning, Entry, Mode
from ..units import slugify
from .common import Contributions, leaf_value, missing_mode_warning, ordered_entries, single_mode

logger = logging.getLogger(__name__)

SOURCE = "typography"

_TEXT_PREFIX_RE = re.compile(r"^text-", re.IGNORECASE)
_LINE_HEIGHT_PREFIX_RE = re.compile(r"^line-?height-?", re.IGNORECASE)


@dataclass
class TypographyExtraction:
    """Flat typography primitives plus per-mode raw values of each token."""

    primitives: dict[str, Any] = field(default_factory=dict)
    font_size: dict[str, dict[Mode, Any]] = field(default_factory=dict)
    line_height: dict[str, dict[Mode, Any]] = field(default_factory=dict)
    warnings: list[BuildWarning] = field(default_factory=list)
    has_section: bool = False


def font_size_name(key: Any) -> str:
    return f"text-{_TEXT_PREFIX_RE.sub('', slugify([key]))}"


def line_height_name(key: Any) -> str:
    return f"line-height-{_LINE_HEIGHT_PREFIX_RE.sub('', slugify([key]))}"


def _collect(
    section: Mapping[str, Any] | None,
    mode: Mode | None,
    naming: Callable[[Any], str],
    into: dict[str, Contributions],
) -> None:
    if section is None:
        return
    for key in sorted(section, key=str):
        raw = leaf_value(section[key])
        if raw is None or isinstance(raw, Mapping | list):
            continue
        into.setdefault(naming(key), {})[mode] = raw


def promote_device_fallback(contributions: Contributions, has_device_modes: bool) -> Contributions:
    """Copy a mode-less value into the missing device modes of a device token.

    Tokens without any device contribution are returned unchanged, so plain
    mode-less values never become tokens.
    """
    if not has_device_modes or None not in contributions:
        return contributions
    if not any(mode in contributions for mode in DEVICE_MODES):
        return contributions
    promoted = dict(contributions)
    fallback = promoted.pop(None)
    for mode in DEVICE_MODES:
        promoted.setdefault(mode, fallback)
    return promoted


def _classify(
    candidates: dict[str, Contributions],
    has_device_modes: bool,
    result: TypographyExtraction,
) -> dict[str, dict[Mode, Any]]:
    tokens: dict[str, dict[Mode, Any]] = {}
    for name in sorted(candidates):
        contributions = promote_device_fallback(candidates[name], has_device_modes)
        degenerate = single_mode(contributions)
        if degenerate is None:
            tokens[name] = {mode: contributions[mode] for mode in Mode if mode in contributions}
            continue
        only_mode, value = degenerate
        result.primitives[name] = value
        if only_mode is not None:
            result.warnings.append(missing_mode_warning(name, only_mode, SOURCE))
    return tokens


def extract_typography(entries: Iterable[Entry]) -> TypographyExtraction:
    result = TypographyExtraction()
    font_candidates: dict[str, Contributions] = {}
    line_candidates: dict[str, Contributions] = {}
    ordered = ordered_entries(entries)

    for entry in ordered:
        font_section = find_section(entry.document, "fontSize")
        line_section = find_section(entry.document, "lineHeight")
        if font_section is not None or line_section is not None:
            result.has_section = True
        _collect(font_section, entry.mode, font_size_name, font_candidates)
        _collect(line_section, entry.mode, line_height_name, line_candidates)

    has_device_modes = any(entry.mode in DEVICE_MODES for entry in ordered)
    result.font_size = _classify(font_candidates, has_device_modes, result)
    result.line_height = _classify(line_candidates, has_device_modes, result)
    logger.debug(
        "Extracted %d typography primitives, %d font-size and %d line-height tokens",
        len(result.primitives),
        len(result.font_size),
        len(result.line_height),
    )
    return result
