"""Shared pytest fixtures for tokencss tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tokencss.ingest import detect_mode
from tokencss.models import Entry


def _hex(value: str) -> dict[str, Any]:
    return {"$type": "color", "$value": {"hex": value}}


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def golden_dir(fixtures_dir: Path) -> Path:
    return fixtures_dir / "golden"


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    """Build an Entry the way ingestion would, detecting the declared mode."""

    def factory(file_name: str, document: dict[str, Any]) -> Entry:
        return Entry(file_name=file_name, document=document, mode=detect_mode(document))

    return factory


@pytest.fixture
def sample_documents() -> list[tuple[str, str]]:
    """A small export: shared primitives plus light/dark and mobile/desktop documents."""
    primitives = {
        "color": {
            "gray": {"100": _hex("#F5F5F5"), "900": _hex("#111111")},
            "brand": {"500": _hex("#3366FF")},
        },
        "spacing": {"4": 4, "8": 8},
        "rounded": {"sm": 4},
        "fontSize": {"16": 16, "18": 18},
        "lineHeight": {"24": 24},
    }
    light = {
        "$extensions": {"com.figma.modeName": "light"},
        "surface": _hex("#F5F5F5"),
        "brand-bg": {
            "$type": "color",
            "$value": {"hex": "#3366FF"},
            "$extensions": {"com.figma.aliasData": {"targetVariableName": "color/brand/500"}},
        },
    }
    dark = {
        "$extensions": {"com.figma.modeName": "dark"},
        "surface": _hex("#111111"),
    }
    mobile = {"mode": "mobile", "fontSize": {"body": 16}, "lineHeight": {"body": 24}}
    desktop = {"mode": "desktop", "fontSize": {"body": 18}, "lineHeight": {"body": 28}}
    return [
        (name, json.dumps(document))
        for name, document in (
            ("primitives.json", primitives),
            ("light.json", light),
            ("dark.json", dark),
            ("mobile.json", mobile),
            ("desktop.json", desktop),
        )
    ]


@pytest.fixture
def sample_dir(tmp_path: Path, sample_documents: list[tuple[str, str]]) -> Path:
    """The sample export written to a source directory."""
    source = tmp_path / "source"
    source.mkdir()
    for name, text in sample_documents:
        (source / name).write_text(text, encoding="utf-8")
    return source
