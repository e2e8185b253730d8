"""Budget-aware path shortening.

Compresses a filesystem path to fit a target number of characters while
keeping as much of its structure readable as possible:

1. Replace the home directory prefix with ``~``. A path that already starts
   with ``~`` is expanded first, so shortening a shortened path is a no-op.
2. Shorten parent directories from longest to shortest by cutting out their
   middles (the base name is never touched).
3. Compact three-character parents to ``x…`` and then ``x…`` parents to ``x``,
   except ``.…``, which would collapse to ``.``.
4. If that still does not fit, middle-truncate the whole string instead.
   If the cut would separate ``~`` from its ``/``, the unabbreviated path is
   truncated instead.

All lengths are counted in code points, which is what ``len`` on ``str``
measures.
"""

from __future__ import annotations

import logging
import os

from promptline.constants import DEFAULT_HOME_MARKER, DEFAULT_TRUNCATOR

log = logging.getLogger(__name__)

# A shortened segment keeps its first and last character plus one truncator.
MIN_SEGMENT_LENGTH = 3


class InvalidPathError(ValueError):
    """Raised when a path cannot be resolved to a clean absolute form."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve path {path!r}: {reason}")


def compress_middle(text: str, truncator: str, max_len: int) -> str:
    """Cut characters out of the middle of ``text`` so it fits ``max_len``.

    The removed run is replaced by a single ``truncator``. The result is
    exactly ``max_len`` characters long, except for ``max_len == 0`` where
    only the truncator is left.

    Args:
        text: String to shorten.
        truncator: Single character marking the removed run.
        max_len: Maximum length of the result.

    Returns:
        ``text`` unchanged if it already fits, otherwise the shortened string.
    """
    length = len(text)
    if length <= max_len:
        return text

    reduction = length - max_len
    start = int(length / 2 - reduction / 2)
    end = start + reduction
    start = max(start, 0)
    end = min(end, length)

    # The truncator takes the place of the character at ``start``, so the
    # tail resumes one past ``end``.
    return text[:start] + truncator + text[end + 1 :]


def _usable_home(home: str | None) -> str | None:
    if not home:
        return None
    home = os.path.normpath(home)
    return None if home == os.sep else home


def substitute_home(path: str, home: str | None, marker: str = DEFAULT_HOME_MARKER) -> str:
    """Replace a leading home directory in ``path`` with ``marker``.

    Only whole path components match: ``/home/al`` does not claim
    ``/home/alice``. An empty, missing or root ``home`` leaves the path alone.
    """
    home = _usable_home(home)
    if home is None:
        return path
    if path == home:
        return marker
    if path.startswith(home + os.sep):
        return marker + path[len(home) :]
    return path


def expand_home(path: str, home: str | None, marker: str = DEFAULT_HOME_MARKER) -> str:
    """Undo :func:`substitute_home`: a leading ``marker`` component becomes ``home``.

    ``~`` and ``~/x`` expand, ``~x`` does not. Without a usable ``home`` the
    path is returned as is.
    """
    home = _usable_home(home)
    if home is None:
        return path
    if path == marker or path.startswith(marker + os.sep):
        return home + path[len(marker) :]
    return path


def normalize_path(path: str) -> str:
    """Return ``path`` as a clean absolute path.

    Raises:
        InvalidPathError: If the path cannot be resolved, e.g. a relative path
            while the current directory no longer exists.
    """
    try:
        return os.path.abspath(path)
    except (OSError, ValueError) as exc:
        raise InvalidPathError(path, str(exc)) from exc


def prettify_path(
    path: str,
    target_length: int,
    home: str | None = None,
    *,
    truncator: str = DEFAULT_TRUNCATOR,
    home_marker: str = DEFAULT_HOME_MARKER,
) -> str:
    """Shorten ``path`` to at most ``target_length`` characters.

    Args:
        path: Absolute or relative path. It does not need to exist.
        target_length: Character budget for the result.
        home: Home directory to abbreviate, usually ``$HOME``. A leading
            ``home_marker`` in ``path`` is read back as this directory, so
            results can be fed in again. ``None`` skips both.
        truncator: Character marking removed text.
        home_marker: Replacement for the home directory prefix.

    Returns:
        The shortened path. When the budget cannot be met by shortening
        individual directories, the whole string is middle-truncated.

    Raises:
        InvalidPathError: If the path cannot be normalized.
    """
    if target_length < 0:
        raise ValueError(f"target_length must be non-negative, got {target_length}")

    absolute = normalize_path(expand_home(path, home, home_marker))
    original = substitute_home(absolute, home, home_marker)
    needed_gain = len(original) - target_length
    if target_length == 0 or needed_gain <= 0:
        return original

    segments = original.split(os.sep)
    first = 1 if segments[0] == home_marker else 0
    last = len(segments) - 1

    # Shorten the longest parent by the minimum amount, one segment per round.
    for _ in range(first, last):
        if needed_gain <= 0:
            break
        longest = first
        for i in range(first, last):
            if len(segments[i]) > len(segments[longest]):
                longest = i

        segment = segments[longest]
        max_gain = len(segment) - MIN_SEGMENT_LENGTH
        if max_gain > 0:
            reduction = min(needed_gain, max_gain)
            segments[longest] = compress_middle(segment, truncator, len(segment) - reduction)
            needed_gain -= reduction

    # "abc" -> "a…"
    for i in range(first, last):
        if needed_gain <= 0:
            break
        if len(segments[i]) == MIN_SEGMENT_LENGTH:
            segments[i] = segments[i][0] + truncator
            needed_gain -= 1

    # "a…" -> "a"
    for i in range(first, last):
        if needed_gain <= 0:
            break
        # ".…" would become "." and vanish on normalization.
        segment = segments[i]
        if len(segment) == 2 and segment[-1] == truncator and segment[0] != ".":
            segments[i] = segments[i][0]
            needed_gain -= 1

    if needed_gain > 0:
        log.debug(
            "Segment truncation of %r fell %d short of %d; truncating whole path",
            original,
            needed_gain,
            target_length,
        )
        # A marker cut off from its separator no longer reads as home.
        if original != absolute and target_length // 2 <= len(home_marker):
            return compress_middle(absolute, truncator, target_length)
        return compress_middle(original, truncator, target_length)

    return os.sep.join(segments)
