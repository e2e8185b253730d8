"""Property-based tests for path prettification using Hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from promptline.prettify import compress_middle, prettify_path
from tests.strategies import absolute_paths, home_dirs, segment_text, target_lengths

pytestmark = pytest.mark.unit


class TestCompressMiddleProperties:
    """Property-based tests for compress_middle."""

    @given(st.text(min_size=1, max_size=50), st.integers(min_value=1, max_value=60))
    def test_result_fits_budget(self, text: str, max_len: int) -> None:
        """Result never exceeds the budget once the budget is at least one."""
        assert len(compress_middle(text, "…", max_len)) <= max_len

    @given(st.text(max_size=50), st.integers(min_value=0, max_value=60))
    def test_fitting_text_untouched(self, text: str, extra: int) -> None:
        """Text already within budget comes back unchanged."""
        assert compress_middle(text, "…", len(text) + extra) == text

    @given(st.text(alphabet="abcdef", min_size=2, max_size=50), st.data())
    def test_single_truncator_between_prefix_and_suffix(self, text: str, data) -> None:
        """Shortened text is a prefix, one truncator, then a suffix of the input."""
        max_len = data.draw(st.integers(min_value=1, max_value=len(text) - 1))
        result = compress_middle(text, "…", max_len)
        assert result.count("…") == 1
        head, tail = result.split("…")
        assert text.startswith(head)
        assert text.endswith(tail)


class TestPrettifyPathProperties:
    """Property-based tests for prettify_path."""

    @given(absolute_paths, target_lengths)
    def test_length_bound(self, path: str, target: int) -> None:
        """Output fits the budget whenever the budget is at least one character."""
        assume(target >= 1)
        assert len(prettify_path(path, target)) <= target

    @given(absolute_paths, st.integers(min_value=0, max_value=40))
    def test_within_budget_is_noop(self, path: str, extra: int) -> None:
        """Paths already at or under the target are returned unchanged."""
        assert prettify_path(path, len(path) + extra) == path

    @given(absolute_paths)
    def test_zero_target_is_noop(self, path: str) -> None:
        assert prettify_path(path, 0) == path

    @given(absolute_paths, target_lengths)
    def test_second_pass_is_noop(self, path: str, target: int) -> None:
        """Prettifying an already prettified path changes nothing."""
        once = prettify_path(path, target)
        assert prettify_path(once, target) == once

    @given(home_dirs, absolute_paths, target_lengths)
    def test_second_pass_under_home_is_noop(self, home: str, rest: str, target: int) -> None:
        """The home marker in a result is read back as the home directory."""
        once = prettify_path(home + rest, target, home)
        assert prettify_path(once, target, home) == once

    @given(home_dirs, absolute_paths, target_lengths)
    def test_second_pass_outside_home_is_noop(self, home: str, path: str, target: int) -> None:
        assume(not path.startswith(home + "/"))
        once = prettify_path(path, target, home)
        assert prettify_path(once, target, home) == once

    @given(absolute_paths, st.integers(min_value=1, max_value=80))
    def test_no_dot_components_introduced(self, path: str, target: int) -> None:
        """Shortening never leaves a bare "." that normalization would drop."""
        parts = prettify_path(path, target).split("/")
        assert "." not in parts
        assert ".." not in parts

    @given(absolute_paths, target_lengths)
    def test_deterministic(self, path: str, target: int) -> None:
        assert prettify_path(path, target) == prettify_path(path, target)

    @given(absolute_paths, st.integers(min_value=1, max_value=80))
    def test_base_name_kept_or_single_truncator(self, path: str, target: int) -> None:
        """Either the base name survives intact or the whole path was middle-truncated."""
        result = prettify_path(path, target)
        base = path.rsplit("/", 1)[1]
        assert result.endswith("/" + base) or result.count("…") <= 1

    @given(st.lists(segment_text, min_size=1, max_size=6), target_lengths)
    def test_home_marker_survives_segment_passes(self, parts: list[str], target: int) -> None:
        """Home-relative results keep the marker unless the fallback kicked in."""
        home = "/home/user"
        result = prettify_path(home + "/" + "/".join(parts), target, home)
        assert result.startswith("~/") or result.count("…") == 1 or target == 0
