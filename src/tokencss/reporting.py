"""
Run log and summary counts.

``PipelineLog`` keeps the ordered, human-readable message list of one run and
forwards every message to the module logger and an optional caller sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]


@dataclass
class PipelineLog:
    """Ordered message list handed to a caller-supplied sink."""

    sink: LogSink | None = None
    messages: list[str] = field(default_factory=list)

    def emit(self, message: str, level: int = logging.INFO) -> None:
        self.messages.append(message)
        logger.log(level, "%s", message)
        if self.sink is None:
            return
        try:
            self.sink(message)
        except Exception as e:  # noqa: BLE001
            logger.debug("Log sink failed on %r: %s", message, e)

    def warning(self, message: str) -> None:
        self.emit(message, logging.WARNING)


@dataclass(frozen=True)
class BuildSummary:
    """Per-run counts reported after a build."""

    files: int = 0
    color_primitives: int = 0
    color_tokens: int = 0
    spacing_primitives: int = 0
    spacing_tokens: int = 0
    rounded_primitives: int = 0
    typography_primitives: int = 0
    typography_tokens: int = 0
    synthesized: int = 0
    warnings: int = 0

    def rows(self) -> list[tuple[str, int, int]]:
        """(category, primitives, tokens) rows for tabular display."""
        return [
            ("Colors", self.color_primitives, self.color_tokens),
            ("Spacing", self.spacing_primitives, self.spacing_tokens),
            ("Rounded", self.rounded_primitives, 0),
            ("Typography", self.typography_primitives, self.typography_tokens),
        ]

    def lines(self) -> list[str]:
        out = [f"Files parsed: {self.files}"]
        for category, primitives, tokens in self.rows():
            out.append(
                f"{category}: {primitives + tokens} ({primitives} primitives, {tokens} tokens)"
            )
        out.append(f"Synthesized primitives: {self.synthesized}")
        out.append(f"Warnings: {self.warnings}")
        return out
