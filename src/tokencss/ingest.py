"""
Entry ingestion and mode classification.

Turns raw exported documents into immutable ``Entry`` records. A document
that fails to read or parse is logged and skipped; the rest of the batch is
unaffected.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .errors import DocumentParseError
from .models import Entry, Mode
from .reporting import PipelineLog

logger = logging.getLogger(__name__)

MODE_EXTENSION_KEY = "com.figma.modeName"

# Normalised (lowercase, no dashes or underscores) spellings of each section.
SECTION_ALIASES: dict[str, frozenset[str]] = {
    "color": frozenset({"color", "colors"}),
    "spacing": frozenset({"spacing", "spacings"}),
    "rounded": frozenset({"rounded", "radius"}),
    "fontSize": frozenset({"fontsize", "font"}),
    "lineHeight": frozenset({"lineheight"}),
}


def normalize_key(key: Any) -> str:
    return str(key).lower().replace("-", "").replace("_", "")


def is_section_key(key: Any) -> bool:
    normalized = normalize_key(key)
    return any(normalized in aliases for aliases in SECTION_ALIASES.values())


def find_section(document: Mapping[str, Any], section: str) -> Mapping[str, Any] | None:
    """Return the first (by sorted key) object matching ``section``, case-insensitively."""
    aliases = SECTION_ALIASES[section]
    for key in sorted(document, key=str):
        value = document[key]
        if normalize_key(key) in aliases and isinstance(value, Mapping):
            return value
    return None


def detect_mode(document: Mapping[str, Any]) -> Mode | None:
    """Read the declared mode from the metadata extension or a bare ``mode`` field."""
    raw = None
    extensions = document.get("$extensions")
    if isinstance(extensions, Mapping):
        raw = extensions.get(MODE_EXTENSION_KEY)
    if not raw:
        raw = document.get("mode")
    return Mode.parse(raw) if raw else None


def parse_document(file_name: str, text: str) -> Entry:
    """Parse one document.

    Raises:
        DocumentParseError: If the text is not JSON or not a JSON object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentParseError(file_name, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(document, dict):
        raise DocumentParseError(
            file_name, f"expected a JSON object, got {type(document).__name__}"
        )
    return Entry(file_name=file_name, document=document, mode=detect_mode(document))


def ingest_documents(
    documents: Iterable[tuple[str, str | BaseException]],
    log: PipelineLog,
) -> list[Entry]:
    """Parse ``(file_name, text)`` pairs in arrival order.

    A pair whose text is an exception records a failed read.
    """
    entries: list[Entry] = []
    for file_name, text in documents:
        try:
            if isinstance(text, BaseException):
                raise DocumentParseError(file_name, str(text) or type(text).__name__) from text
            entry = parse_document(file_name, text)
        except DocumentParseError as e:
            log.warning(f"Failed to parse {e.message}")
            continue
        log.emit(f"Parsed {file_name} (mode: {entry.mode.value if entry.mode else 'none'})")
        entries.append(entry)
    return entries


# =============================================================================
# Async reading
# =============================================================================


def list_documents(source_dir: Path) -> list[Path]:
    """JSON files directly inside ``source_dir``, sorted by name."""
    if not source_dir.is_dir():
        logger.warning("Source directory %s does not exist", source_dir)
        return []
    return sorted(p for p in source_dir.iterdir() if p.is_file() and p.suffix == ".json")


async def read_documents(paths: Iterable[Path]) -> list[tuple[str, str | BaseException]]:
    """Read every file concurrently; failures come back as exception values."""
    paths = list(paths)
    results = await asyncio.gather(
        *(asyncio.to_thread(path.read_text, encoding="utf-8") for path in paths),
        return_exceptions=True,
    )
    return [(path.name, result) for path, result in zip(paths, results, strict=True)]


async def load_directory(source_dir: Path, log: PipelineLog) -> list[Entry]:
    documents = await read_documents(list_documents(source_dir))
    return ingest_documents(documents, log)
