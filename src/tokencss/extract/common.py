"""Helpers shared by the domain extractors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import WarningKind
from ..models import BuildWarning, Entry, Mode

Contributions = dict[Mode | None, Any]


def ordered_entries(entries: Iterable[Entry]) -> list[Entry]:
    return sorted(entries, key=lambda e: e.file_name)


def leaf_value(node: Any) -> Any:
    """The ``$value`` of a token leaf, or the node itself when it is a bare scalar."""
    if isinstance(node, Mapping):
        return node.get("$value")
    return node


def single_mode(contributions: Mapping[Mode | None, Any]) -> tuple[Mode | None, Any] | None:
    """Return the ``(mode, value)`` a candidate degenerates to, or None when it stays a token.

    Only named modes count: two or more named modes keep a token; one named
    mode degenerates to that mode's value; no named mode degenerates to the
    mode-less value.
    """
    named = [mode for mode in Mode if mode in contributions]
    if len(named) >= 2:
        return None
    if named:
        return named[0], contributions[named[0]]
    return None, contributions.get(None)


def missing_mode_warning(token: str, mode: Mode, source: str) -> BuildWarning:
    return BuildWarning(
        kind=WarningKind.MISSING_MODE_VARIANT,
        token=token,
        source=source,
        message=f"Token '{token}' present only in mode '{mode.value}'. Missing counterpart mode.",
    )
