"""Configuration loader for promptline."""

from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Self

import tomlkit
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from promptline.atomic import atomic_write
from promptline.constants import (
    DEFAULT_HOME_MARKER,
    DEFAULT_PATH_WIDTH,
    DEFAULT_TIME_FORMAT,
    DEFAULT_TRUNCATOR,
    FIRST_LINE_GLYPH,
    GIT_TIMEOUT,
    MAX_LIGHTNESS,
    MIN_LIGHTNESS,
    SECOND_LINE_GLYPH,
)
from promptline.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path


class ConfigError(Exception):
    """Raised when the config file cannot be parsed or fails validation."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Invalid config {path}: {message}")


class GeneralConfig(BaseModel):
    """General configuration settings."""

    path_width: int = Field(
        default=DEFAULT_PATH_WIDTH,
        ge=0,
        description="Character budget for the working directory (0 = no limit)",
    )
    show_git: bool = Field(default=True, description="Show the branch and work tree state")
    time_format: str = Field(
        default=DEFAULT_TIME_FORMAT,
        description='"epoch" for Unix seconds, otherwise a strftime pattern',
    )
    git_timeout: float = Field(
        default=GIT_TIMEOUT, gt=0, description="Seconds to wait for git status"
    )


class GlyphConfig(BaseModel):
    """Characters drawn around and inside the prompt."""

    truncator: str = Field(default=DEFAULT_TRUNCATOR, description="Marks removed path text")
    home_marker: str = Field(default=DEFAULT_HOME_MARKER, min_length=1)
    first_line: str = Field(default=FIRST_LINE_GLYPH)
    second_line: str = Field(default=SECOND_LINE_GLYPH)

    @field_validator("truncator")
    @classmethod
    def validate_truncator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("truncator must be exactly one character")
        if value == os.sep:
            raise ValueError("truncator must not be the path separator")
        return value

    @field_validator("home_marker")
    @classmethod
    def validate_home_marker(cls, value: str) -> str:
        # The marker has to stay a single path component.
        if os.sep in value:
            raise ValueError(f"home_marker must not contain {os.sep!r}")
        return value


class ColorConfig(BaseModel):
    """Lightness range for the hashed user@host color."""

    min_lightness: float = Field(default=MIN_LIGHTNESS, ge=0, le=1)
    max_lightness: float = Field(default=MAX_LIGHTNESS, ge=0, le=1)

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        if self.min_lightness > self.max_lightness:
            raise ValueError("min_lightness must not exceed max_lightness")
        return self


class PromptConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    glyphs: GlyphConfig = Field(default_factory=GlyphConfig)
    colors: ColorConfig = Field(default_factory=ColorConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> PromptConfig:
        """Load configuration from TOML file or use defaults.

        Raises:
            ConfigError: If the file is not valid TOML or fails validation.
        """
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(config_path, str(exc)) from exc
        except ValidationError as exc:
            raise ConfigError(config_path, str(exc)) from exc

    def to_toml(self) -> str:
        """Serialize to a commented TOML document."""
        doc = tomlkit.document()
        doc.add(tomlkit.comment("promptline configuration"))

        for section_name, section in (
            ("general", self.general),
            ("glyphs", self.glyphs),
            ("colors", self.colors),
        ):
            table = tomlkit.table()
            for key, value in section.model_dump().items():
                item = tomlkit.item(value)
                description = type(section).model_fields[key].description
                if description:
                    item.comment(description)
                table.add(key, item)
            doc[section_name] = table

        return tomlkit.dumps(doc)

    def save(self, path: Path) -> None:
        """Write the config to ``path`` atomically."""
        atomic_write(path, self.to_toml())
