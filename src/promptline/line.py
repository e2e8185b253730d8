"""Assemble the status prompt from its parts."""

from __future__ import annotations

import logging
import os
import socket
import time
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from promptline.ansi import Color, colored, colored_256, true_colored
from promptline.colors import color_hash
from promptline.constants import MAX_LIGHTNESS, MIN_LIGHTNESS
from promptline.git_utils import RepoState, classify_status, current_branch, current_status
from promptline.prettify import InvalidPathError, prettify_path

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from promptline.config import PromptConfig

log = logging.getLogger(__name__)

BRANCH_COLORS = {
    RepoState.CLEAN: Color.GREEN,
    RepoState.UNTRACKED: Color.YELLOW,
    RepoState.MODIFIED: Color.RED,
}


@dataclass(frozen=True, slots=True)
class PromptParts:
    """Uncolored values shown in the prompt."""

    timestamp: float
    user: str
    host: str
    path: str
    branch: str = ""
    state: RepoState = RepoState.CLEAN


def format_timestamp(timestamp: float, fmt: str) -> str:
    """Render ``timestamp`` as Unix seconds ("epoch") or with a strftime pattern."""
    if fmt == "epoch":
        return str(int(timestamp))
    return datetime.fromtimestamp(timestamp).strftime(fmt)


def display_path(cwd: Path, config: PromptConfig, home: str | None) -> str:
    """Prettify ``cwd``, falling back to the raw path if it cannot be resolved."""
    try:
        return prettify_path(
            str(cwd),
            config.general.path_width,
            home,
            truncator=config.glyphs.truncator,
            home_marker=config.glyphs.home_marker,
        )
    except InvalidPathError as exc:
        log.warning("%s", exc)
        return str(cwd)


def collect_parts(
    cwd: Path,
    config: PromptConfig,
    *,
    env: Mapping[str, str] | None = None,
    now: float | None = None,
) -> PromptParts:
    """Gather everything the prompt shows for ``cwd``."""
    if env is None:
        env = os.environ

    branch = ""
    state = RepoState.CLEAN
    if config.general.show_git:
        branch = current_branch(cwd)
        if branch:
            state = classify_status(current_status(cwd, config.general.git_timeout))
        log.debug("branch=%r state=%s", branch, state.value)

    return PromptParts(
        timestamp=time.time() if now is None else now,
        user=env.get("USER", ""),
        host=socket.gethostname(),
        path=display_path(cwd, config, env.get("HOME")),
        branch=branch,
        state=state,
    )


def user_and_host(
    user: str,
    host: str,
    *,
    truecolor: bool,
    min_lightness: float = MIN_LIGHTNESS,
    max_lightness: float = MAX_LIGHTNESS,
) -> str:
    """``[user@host]`` with the punctuation in a color hashed from both names."""
    hex_color = color_hash(user + host, min_lightness, max_lightness)

    paint = true_colored if truecolor else colored_256
    return paint("[", hex_color) + user + paint("@", hex_color) + host + paint("]", hex_color)


def render_line(parts: PromptParts, config: PromptConfig, *, truecolor: bool) -> str:
    """Format ``parts`` into the two-line prompt."""
    identity = user_and_host(
        parts.user,
        parts.host,
        truecolor=truecolor,
        min_lightness=config.colors.min_lightness,
        max_lightness=config.colors.max_lightness,
    )
    fields = [
        colored(format_timestamp(parts.timestamp, config.general.time_format), Color.MAGENTA),
        identity,
        colored(parts.path, Color.BLUE),
    ]
    if config.general.show_git:
        fields.append(colored(parts.branch, BRANCH_COLORS[parts.state]))

    return config.glyphs.first_line + " ".join(fields) + "\n" + config.glyphs.second_line


def render_prompt(
    cwd: Path,
    config: PromptConfig,
    *,
    truecolor: bool,
    env: Mapping[str, str] | None = None,
    now: float | None = None,
) -> str:
    """Collect and render the prompt for ``cwd`` in one step."""
    return render_line(collect_parts(cwd, config, env=env, now=now), config, truecolor=truecolor)
