"""Git repository lookups for the prompt.

Every helper degrades to an empty result instead of raising, since a prompt
has to render even outside a repository or without git installed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from enum import Enum
from typing import TYPE_CHECKING

from promptline.constants import FULL_HASH_LENGTH, GIT_DIR_NAME, GIT_TIMEOUT, SHORT_HASH_LENGTH

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

log = logging.getLogger(__name__)

_UNTRACKED_CODES = frozenset("A?")
_MODIFIED_CODES = frozenset("MRDU")


class RepoState(Enum):
    """Dirtiness of a work tree, as shown by the branch color."""

    CLEAN = "clean"
    UNTRACKED = "untracked"
    MODIFIED = "modified"


def find_git_dir(start: Path) -> Path | None:
    """Return the nearest ``.git`` directory at or above ``start``.

    The filesystem root itself is not searched. Returns None when no
    repository is found or a directory on the way up cannot be read.
    """
    current = start.absolute()
    while current != current.parent:
        candidate = current / GIT_DIR_NAME
        try:
            if candidate.is_dir():
                return candidate
        except OSError as exc:
            log.debug("Cannot inspect %s: %s", candidate, exc)
            return None
        current = current.parent
    return None


def parse_head(ref_spec: str) -> str:
    """Turn the contents of a HEAD file into a branch label.

    ``ref: refs/heads/main`` gives ``main``; a bare commit hash (detached
    HEAD) gives its short form; anything else is flagged as a bad ref.
    """
    ref_spec = ref_spec.strip()
    parts = ref_spec.split("/", 2)
    if len(parts) == 3:
        return parts[2].strip()
    if len(parts) == 1 and len(ref_spec) == FULL_HASH_LENGTH:
        return ref_spec[:SHORT_HASH_LENGTH]
    return f"BAD_REF_SPEC ({ref_spec})"


def current_branch(start: Path) -> str:
    """Return the branch checked out in the repository containing ``start``.

    Returns an empty string outside a repository or if HEAD is unreadable.
    """
    git_dir = find_git_dir(start)
    if git_dir is None:
        return ""
    try:
        content = (git_dir / "HEAD").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("Cannot read HEAD in %s: %s", git_dir, exc)
        return ""
    return parse_head(content)


def parse_porcelain(output: str) -> dict[str, str]:
    """Map file names to status codes from ``git status --porcelain`` output."""
    files: dict[str, str] = {}
    for line in output.strip().splitlines():
        parts = line.split(maxsplit=1)
        if len(parts) == 2:
            files[parts[1]] = parts[0]
    return files


def current_status(cwd: Path, timeout: float = GIT_TIMEOUT) -> dict[str, str] | None:
    """Run ``git status --porcelain`` in ``cwd``.

    Returns None if git is missing, times out or fails (e.g. not a repo).
    """
    git_path = shutil.which("git")
    if git_path is None:
        log.debug("git executable not found")
        return None

    try:
        result = subprocess.run(
            [git_path, "status", "--porcelain"],
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        log.debug("git status timed out after %.1fs in %s", timeout, cwd)
        return None
    except (subprocess.SubprocessError, OSError) as exc:
        log.debug("git status failed in %s: %s", cwd, exc)
        return None

    if result.returncode != 0:
        log.debug("git status exited %d: %s", result.returncode, result.stderr.strip())
        return None
    return parse_porcelain(result.stdout)


def classify_status(statuses: Mapping[str, str] | None) -> RepoState:
    """Collapse per-file status codes into a single work tree state.

    Modified, renamed, deleted or unmerged files win over untracked or
    newly added ones.
    """
    if not statuses:
        return RepoState.CLEAN

    has_untracked = False
    for status in statuses.values():
        if _MODIFIED_CODES.intersection(status):
            return RepoState.MODIFIED
        has_untracked = has_untracked or bool(_UNTRACKED_CODES.intersection(status))

    return RepoState.UNTRACKED if has_untracked else RepoState.CLEAN
