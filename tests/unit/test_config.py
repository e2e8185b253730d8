"""Unit tests for configuration loading and saving."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from promptline.config import ColorConfig, ConfigError, GlyphConfig, PromptConfig
from promptline.constants import DEFAULT_PATH_WIDTH, DEFAULT_TRUNCATOR

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_defaults(self) -> None:
        config = PromptConfig()
        assert config.general.path_width == DEFAULT_PATH_WIDTH
        assert config.general.show_git is True
        assert config.general.time_format == "epoch"
        assert config.glyphs.truncator == DEFAULT_TRUNCATOR
        assert config.glyphs.home_marker == "~"

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert PromptConfig.load(tmp_path / "nope.toml") == PromptConfig()

    def test_default_location(self, config_dir: Path) -> None:
        (config_dir).mkdir(parents=True)
        (config_dir / "config.toml").write_text("[general]\npath_width = 20\n", encoding="utf-8")
        assert PromptConfig.load().general.path_width == 20


class TestLoad:
    def test_partial_file_merges_with_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[glyphs]\ntruncator = "*"\n', encoding="utf-8")

        config = PromptConfig.load(path)

        assert config.glyphs.truncator == "*"
        assert config.general.path_width == DEFAULT_PATH_WIDTH

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[general\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            PromptConfig.load(path)
        assert exc_info.value.path == path

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[general]\npath_width = -3\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="path_width"):
            PromptConfig.load(path)


class TestValidation:
    @pytest.mark.parametrize("truncator", ["", "..."])
    def test_truncator_must_be_one_character(self, truncator: str) -> None:
        with pytest.raises(ValidationError):
            GlyphConfig(truncator=truncator)

    def test_truncator_cannot_be_separator(self) -> None:
        with pytest.raises(ValidationError, match="separator"):
            GlyphConfig(truncator="/")

    @pytest.mark.parametrize("marker", ["~/h", "/", "home/"])
    def test_home_marker_is_one_component(self, marker: str) -> None:
        with pytest.raises(ValidationError, match="home_marker"):
            GlyphConfig(home_marker=marker)

    def test_home_marker_from_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[glyphs]\nhome_marker = "~/h"\n', encoding="utf-8")

        with pytest.raises(ConfigError, match="home_marker"):
            PromptConfig.load(path)

    def test_multi_character_marker_allowed(self) -> None:
        assert GlyphConfig(home_marker="HOME").home_marker == "HOME"

    def test_lightness_range_ordered(self) -> None:
        with pytest.raises(ValidationError):
            ColorConfig(min_lightness=0.9, max_lightness=0.2)

    def test_lightness_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ColorConfig(max_lightness=1.5)


class TestSave:
    def test_roundtrip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        config = PromptConfig.model_validate(
            {"general": {"path_width": 42, "time_format": "%H:%M"}, "glyphs": {"truncator": "~"}}
        )

        config.save(path)

        assert PromptConfig.load(path) == config

    def test_written_file_is_commented_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        PromptConfig().save(path)

        content = path.read_text(encoding="utf-8")
        assert content.startswith("# promptline configuration")
        assert "# Character budget for the working directory" in content
        assert tomllib.loads(content)["general"]["path_width"] == DEFAULT_PATH_WIDTH

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        PromptConfig().save(tmp_path / "config.toml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
