"""Tests for tokencss.yaml loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tokencss.config import CONFIG_FILE, PipelineConfig, load_config, load_config_file
from tokencss.errors import ConfigError


class TestPipelineConfig:
    def test_defaults(self):
        config = PipelineConfig()
        assert config.viewport_min_px == 360
        assert config.viewport_max_px == 1280
        assert config.root_font_size_px == 16
        assert config.header_title == "Project theme"
        assert config.emit_breakpoints is True
        assert config.write_warnings_file is True

    def test_frozen(self):
        config = PipelineConfig()
        with pytest.raises(ValidationError):
            config.viewport_min_px = 320  # type: ignore[misc]

    def test_viewport_range_must_grow(self):
        with pytest.raises(ValidationError, match="viewport_max_px"):
            PipelineConfig(viewport_min_px=1280, viewport_max_px=360)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            PipelineConfig(viewport=1)  # type: ignore[call-arg]


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path) == PipelineConfig()

    def test_missing_file_without_defaults(self, tmp_path):
        with pytest.raises(ConfigError, match="Config not found"):
            load_config(tmp_path, use_defaults=False)

    def test_reads_values(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text(
            "viewport_min_px: 320\nviewport_max_px: 1440\nheader_title: Acme theme\n"
        )
        config = load_config(tmp_path)
        assert config.viewport_min_px == 320
        assert config.viewport_max_px == 1440
        assert config.header_title == "Acme theme"
        assert config.root_font_size_px == 16

    def test_empty_file_uses_defaults(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text("")
        assert load_config(tmp_path) == PipelineConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / CONFIG_FILE
        path.write_text("viewport_min_px: [1, 2\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / CONFIG_FILE
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_config_file(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / CONFIG_FILE
        path.write_text("viewport_min_px: 1300\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config_file(path)

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config_file(tmp_path / "nope.yaml")
