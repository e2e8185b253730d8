"""Where promptline keeps its config file and exported logs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from platformdirs import user_config_dir, user_data_dir

if TYPE_CHECKING:
    from collections.abc import Callable

APP_NAME = "promptline"


def _resolve_dir(env_var: str, platform_default: Callable[[str], str]) -> Path:
    # An empty override counts as unset.
    override = os.environ.get(env_var)
    return Path(override) if override else Path(platform_default(APP_NAME))


def get_config_dir() -> Path:
    """``$PROMPTLINE_CONFIG_DIR``, else the platform config dir."""
    return _resolve_dir("PROMPTLINE_CONFIG_DIR", user_config_dir)


def get_data_dir() -> Path:
    """``$PROMPTLINE_DATA_DIR``, else the platform data dir."""
    return _resolve_dir("PROMPTLINE_DATA_DIR", user_data_dir)


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_debug_log_path() -> Path:
    """Target of ``promptline render --export-log``."""
    return get_data_dir() / "debug.log"
