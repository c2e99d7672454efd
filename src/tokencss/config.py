"""
Pipeline configuration for tokencss.

Settings live in ``tokencss.yaml`` at the project root. Every field has a
default, so a project without the file builds with the canonical behaviour.

Default location: {project_root}/tokencss.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "tokencss.yaml"


class PipelineConfig(BaseModel):
    """Tunable parameters of a build run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    viewport_min_px: float = Field(default=360, gt=0, description="Viewport of the mobile endpoint")
    viewport_max_px: float = Field(
        default=1280, gt=0, description="Viewport of the desktop endpoint"
    )
    root_font_size_px: float = Field(default=16, gt=0, description="Pixels per rem")
    header_title: str = Field(default="Project theme", min_length=1)
    emit_breakpoints: bool = True
    write_warnings_file: bool = True

    @model_validator(mode="after")
    def _check_viewport_range(self) -> PipelineConfig:
        if self.viewport_max_px <= self.viewport_min_px:
            raise ValueError(
                f"viewport_max_px ({self.viewport_max_px}) must be greater than "
                f"viewport_min_px ({self.viewport_min_px})"
            )
        return self


# =============================================================================
# Path helpers
# =============================================================================


def get_config_path(project_root: Path) -> Path:
    """Get the tokencss.yaml file path."""
    return project_root / CONFIG_FILE


# =============================================================================
# Loading
# =============================================================================


def _parse_config_data(data: Any, source: Path) -> PipelineConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {source}, got {type(data).__name__}")
    try:
        return PipelineConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def load_config_file(path: Path) -> PipelineConfig:
    """Load configuration from an explicit YAML file.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if data is None:
        logger.warning("Empty config file at %s, using defaults", path)
        return PipelineConfig()
    return _parse_config_data(data, path)


def load_config(project_root: Path, *, use_defaults: bool = True) -> PipelineConfig:
    """Load configuration from tokencss.yaml.

    Args:
        project_root: Directory that may contain tokencss.yaml.
        use_defaults: If True, return the default configuration when the file
            doesn't exist.

    Returns:
        PipelineConfig instance.

    Raises:
        ConfigError: If the file doesn't exist (when use_defaults=False) or is invalid.
    """
    config_path = get_config_path(project_root)

    if not config_path.exists():
        if use_defaults:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return PipelineConfig()
        raise ConfigError(f"Config not found: {config_path}")

    return load_config_file(config_path)
