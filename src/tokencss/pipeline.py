"""
Build pipeline: ingestion, extraction, registry, normalization, assembly.

``build_theme`` is the single shared core and a pure function of its entry
list. Two adapters wrap it: ``build_from_documents`` for in-memory
``(file_name, text)`` pairs and ``build_from_directory`` for a source
directory of exported JSON files, which also writes the artifacts.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .assembler import AssemblyContext, ThemeAssembler
from .config import PipelineConfig
from .defaults import DEFAULT_THEME, ThemeDefaults
from .errors import WarningKind
from .extract import extract_colors, extract_spacing, extract_typography
from .ingest import ingest_documents, load_directory
from .models import BuildWarning, Entry, Namespace, TokenSet
from .normalize import normalize_tokens, validate_references
from .registry import PrimitiveRegistry
from .reporting import BuildSummary, LogSink, PipelineLog

logger = logging.getLogger(__name__)

THEME_FILE = "theme.css"
PRIMITIVES_FILE = "primitives.json"
TOKENS_FILE = "tokens.json"
WARNINGS_FILE = "extraction-warnings.json"


@dataclass
class ThemeBuild:
    """Everything one pipeline run produced."""

    theme_css: str
    primitives: dict[str, Any]
    tokens: dict[str, Any]
    warnings: list[BuildWarning] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)
    summary: BuildSummary = field(default_factory=BuildSummary)

    def warnings_json(self) -> list[dict[str, Any]]:
        return [w.to_json() for w in self.warnings]


def _summarize(
    entries: Sequence[Entry],
    registry: PrimitiveRegistry,
    tokens: TokenSet,
    warnings: Sequence[BuildWarning],
) -> BuildSummary:
    return BuildSummary(
        files=len(entries),
        color_primitives=registry.count(Namespace.COLOR),
        color_tokens=len(tokens.colors),
        spacing_primitives=registry.count(Namespace.SPACING),
        spacing_tokens=len(tokens.spacing),
        rounded_primitives=registry.count(Namespace.ROUNDED),
        typography_primitives=(
            registry.count(Namespace.FONT_SIZE) + registry.count(Namespace.LINE_HEIGHT)
        ),
        typography_tokens=len(tokens.font_size) + len(tokens.line_height),
        synthesized=len(registry.synthesized),
        warnings=len(warnings),
    )


def build_theme(
    entries: Sequence[Entry],
    *,
    config: PipelineConfig | None = None,
    defaults: ThemeDefaults = DEFAULT_THEME,
    sink: LogSink | None = None,
    log: PipelineLog | None = None,
) -> ThemeBuild:
    """Run extraction, normalization and assembly over parsed entries.

    Args:
        entries: Parsed documents; order does not affect the result.
        config: Pipeline configuration (defaults when omitted).
        defaults: Default tables injected into the registry and assembler.
        sink: Receives every log message, in order.
        log: Existing run log to append to (its sink takes precedence).

    Returns:
        ThemeBuild with the stylesheet, both JSON trees, warnings and logs.
    """
    config = config or PipelineConfig()
    log = log if log is not None else PipelineLog(sink)

    colors = extract_colors(entries)
    spacing = extract_spacing(entries)
    typography = extract_typography(entries)

    registry = PrimitiveRegistry(defaults, config.root_font_size_px)
    registry.merge(colors.primitives, spacing.primitives, typography.primitives)
    if not entries:
        registry.add_baseline_defaults()

    tokens = normalize_tokens(colors, spacing, typography, registry, log)
    warnings = [
        *colors.warnings,
        *typography.warnings,
        *validate_references(tokens, registry),
    ]

    context = AssemblyContext(
        modes=frozenset(entry.mode for entry in entries if entry.mode is not None),
        has_spacing_section=spacing.has_spacing_section,
        has_typography_section=typography.has_section,
        empty_input=not entries,
    )
    assembly = ThemeAssembler(registry, tokens, config, defaults).render(context)
    for correction in assembly.corrections:
        log.emit(f"Structure corrected: {correction}", logging.WARNING)
        warnings.append(
            BuildWarning(kind=WarningKind.STRUCTURAL_DRIFT, message=correction, source="assemble")
        )

    for warning in warnings:
        log.warning(warning.format())

    summary = _summarize(entries, registry, tokens, warnings)
    for line in summary.lines():
        log.emit(line)

    return ThemeBuild(
        theme_css=assembly.css,
        primitives=registry.to_json(),
        tokens=tokens.to_json(),
        warnings=warnings,
        logs=list(log.messages),
        summary=summary,
    )


# =============================================================================
# Adapters
# =============================================================================


def build_from_documents(
    documents: Iterable[tuple[str, str]],
    *,
    config: PipelineConfig | None = None,
    defaults: ThemeDefaults = DEFAULT_THEME,
    sink: LogSink | None = None,
) -> ThemeBuild:
    """Build from in-memory ``(file_name, text)`` pairs; malformed documents are skipped."""
    log = PipelineLog(sink)
    entries = ingest_documents(documents, log)
    return build_theme(entries, config=config, defaults=defaults, log=log)


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_artifacts(
    build: ThemeBuild, output_dir: Path, *, write_warnings_file: bool = True
) -> list[Path]:
    """Write the stylesheet and manifests; keep the warnings file in sync.

    Returns:
        Paths of the files written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, content in (
        (THEME_FILE, build.theme_css),
        (PRIMITIVES_FILE, _dump_json(build.primitives)),
        (TOKENS_FILE, _dump_json(build.tokens)),
    ):
        path = output_dir / name
        path.write_text(content, encoding="utf-8")
        written.append(path)

    warnings_path = output_dir / WARNINGS_FILE
    if build.warnings and write_warnings_file:
        warnings_path.write_text(_dump_json(build.warnings_json()), encoding="utf-8")
        written.append(warnings_path)
    elif warnings_path.exists():
        logger.debug("Removing stale %s", warnings_path)
        warnings_path.unlink()

    for path in written:
        logger.info("Wrote %s", path)
    return written


async def build_from_directory_async(
    source_dir: Path,
    output_dir: Path,
    *,
    config: PipelineConfig | None = None,
    defaults: ThemeDefaults = DEFAULT_THEME,
    sink: LogSink | None = None,
) -> ThemeBuild:
    config = config or PipelineConfig()
    log = PipelineLog(sink)
    entries = await load_directory(source_dir, log)
    build = build_theme(entries, config=config, defaults=defaults, log=log)
    write_artifacts(build, output_dir, write_warnings_file=config.write_warnings_file)
    return build


def build_from_directory(
    source_dir: Path,
    output_dir: Path,
    *,
    config: PipelineConfig | None = None,
    defaults: ThemeDefaults = DEFAULT_THEME,
    sink: LogSink | None = None,
) -> ThemeBuild:
    """Read every ``*.json`` in ``source_dir`` and write the artifacts to ``output_dir``."""
    return asyncio.run(
        build_from_directory_async(
            source_dir, output_dir, config=config, defaults=defaults, sink=sink
        )
    )
